"""Shared test fixtures for the mkcdda test suite.

WHY: Parser, assembler and CLI tests all need small, exactly-controlled
WAV files: valid ones, ones with extra chunks, and deliberately broken
ones. Building them byte by byte here keeps every test explicit about
what the container holds.

HOW: build_wav() assembles a RIFF/WAVE byte string from a payload and a
handful of knobs (format fields, chunk order, declared vs. actual data
size). Fixtures write such files into tmp_path.

RULES:
- Chunk pad bytes are written for odd-sized chunks, as RIFF requires
- payload_bytes() is deterministic so round-trip checks are meaningful
- UnreliableStream stands in for inputs whose reads or seeks fail
"""

import io
import struct
from typing import List, Optional, Tuple

import pytest


def payload_bytes(length: int, seed: int = 1) -> bytes:
    """Deterministic, non-zero-heavy payload of ``length`` bytes."""
    return bytes((i * 7 + seed * 31 + 1) % 256 for i in range(length))


def fmt_body(
    audio_format: int = 1,
    channels: int = 2,
    sample_rate: int = 44100,
    bits_per_sample: int = 16,
    extra: bytes = b"",
) -> bytes:
    block_align = channels * bits_per_sample // 8
    byte_rate = sample_rate * block_align
    return struct.pack(
        "<HHIIHH",
        audio_format, channels, sample_rate, byte_rate, block_align, bits_per_sample,
    ) + extra


def chunk(tag: bytes, body: bytes, declared_size: Optional[int] = None) -> bytes:
    size = len(body) if declared_size is None else declared_size
    pad = b"\x00" if len(body) % 2 else b""
    return struct.pack("<4sI", tag, size) + body + pad


def build_wav(
    payload: bytes,
    fmt: Optional[bytes] = None,
    extra_chunks: Optional[List[Tuple[bytes, bytes]]] = None,
    data_first: bool = False,
    declared_data_size: Optional[int] = None,
    include_fmt: bool = True,
    include_data: bool = True,
    wave_tag: bytes = b"WAVE",
) -> bytes:
    """Assemble a RIFF/WAVE container.

    extra_chunks are placed before the fmt chunk. declared_data_size lets
    the data chunk header claim more bytes than the file holds.
    """
    body = b""
    for tag, content in extra_chunks or []:
        body += chunk(tag, content)

    fmt_part = chunk(b"fmt ", fmt if fmt is not None else fmt_body()) if include_fmt else b""
    data_part = b""
    if include_data:
        if declared_data_size is None:
            data_part = chunk(b"data", payload)
        else:
            # Truncated file: header claims declared_data_size, no pad byte
            data_part = struct.pack("<4sI", b"data", declared_data_size) + payload

    body += (data_part + fmt_part) if data_first else (fmt_part + data_part)
    return struct.pack("<4sI4s", b"RIFF", 4 + len(body), wave_tag) + body


@pytest.fixture
def write_wav(tmp_path):
    """Factory fixture: write_wav(name, payload, **build_wav_kwargs) -> str path."""

    def _write(name: str, payload: bytes, **kwargs) -> str:
        path = tmp_path / name
        path.write_bytes(build_wav(payload, **kwargs))
        return str(path)

    return _write


class UnreliableStream(io.BytesIO):
    """In-memory stream whose I/O calls fail like a bad disk would.

    read_fails_at: reads starting at or past this offset raise OSError(EIO)
    seek_fails / tell_fails: every seek() / tell() call raises OSError
    """

    def __init__(
        self,
        data: bytes,
        read_fails_at: Optional[int] = None,
        seek_fails: bool = False,
        tell_fails: bool = False,
    ) -> None:
        super().__init__(data)
        self.read_fails_at = read_fails_at
        self.seek_fails = seek_fails
        self.tell_fails = tell_fails

    def read(self, size=-1):
        if self.read_fails_at is not None and super().tell() >= self.read_fails_at:
            raise OSError(5, "Input/output error")
        return super().read(size)

    def seek(self, offset, whence=io.SEEK_SET):
        if self.seek_fails:
            raise OSError(29, "Illegal seek")
        return super().seek(offset, whence)

    def tell(self):
        if self.tell_fails:
            raise OSError(29, "Illegal seek")
        return super().tell()
