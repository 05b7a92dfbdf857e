"""RIFF/WAVE container parsing and CDDA profile validation.

WHY: The disc image carries raw PCM only, so every input's data chunk
has to be located exactly and its format checked before any byte is
copied. A misplaced offset or an accepted 48 kHz file would silently
corrupt the image.

HOW: Reads the 12-byte RIFF header, then walks the chunk list. Each chunk
header (4-byte tag, little-endian u32 size) is classified as FORMAT, DATA
or UNKNOWN. The fmt chunk is read through a bounded buffer and decoded
into a FormatDescriptor. For the data chunk only the stream position and
declared size are recorded; its body is skipped. Scanning stops once
both chunks are seen, then the descriptor is validated.

RULES:
- Bytes 0-3 must be "RIFF" and bytes 8-11 "WAVE"
- Odd chunk sizes are followed by one pad byte, for every chunk kind
- At most 40 bytes of the fmt body are read; only the first 16 matter
- A fmt chunk shorter than 16 bytes is skipped and does not count as seen
- A short chunk-header read means end of stream
- Payload bytes are never read here
"""

from __future__ import annotations

import enum
import logging
import os
import struct
from typing import BinaryIO, Optional

from mkcdda.core.errors import (
    MalformedContainerError,
    MissingChunkError,
    UnsupportedFormatError,
    UsageError,
)
from mkcdda.core.ir import AudioSource, FormatDescriptor

logger = logging.getLogger(__name__)

_RIFF_HEADER = struct.Struct("<4sI4s")
_CHUNK_HEADER = struct.Struct("<4sI")
# audio format, channels, sample rate, byte rate, block align, bits per sample
_FMT_FIELDS = struct.Struct("<HHIIHH")

_FMT_BUFFER_SIZE = 40


class ChunkKind(str, enum.Enum):
    """Chunk tags the parser acts on; anything else is skipped unread."""

    FORMAT = "fmt "
    DATA = "data"
    UNKNOWN = ""

    @classmethod
    def from_tag(cls, tag: bytes) -> ChunkKind:
        try:
            return cls(tag.decode("latin-1"))
        except ValueError:
            return cls.UNKNOWN


def _read(stream: BinaryIO, count: int, name: str) -> bytes:
    """Read up to ``count`` bytes, mapping I/O failures to MalformedContainerError."""
    try:
        return stream.read(count)
    except OSError as e:
        raise MalformedContainerError("read error ({})".format(e), name) from e


def _skip(stream: BinaryIO, count: int, name: str) -> None:
    """Seek ``count`` bytes forward, mapping seek failures to MalformedContainerError."""
    if count <= 0:
        return
    try:
        stream.seek(count, os.SEEK_CUR)
    except (OSError, ValueError) as e:
        raise MalformedContainerError("seek failed ({})".format(e), name) from e


def _read_format(stream: BinaryIO, size: int, name: str) -> Optional[FormatDescriptor]:
    """Read a fmt chunk body of declared ``size`` and decode it.

    WHY: Extended fmt chunks (WAVE_FORMAT_EXTENSIBLE, cbSize fields) can
    be longer than 16 bytes; only the fixed-offset prefix is needed.

    HOW: Reads min(size, 40) bytes, decodes the 16-byte prefix when the
    declared size allows it, then seeks past any remainder.

    RULES:
    - Short read of the capped prefix raises MalformedContainerError
    - Returns None when size < 16 (no usable descriptor)
    """
    need = min(size, _FMT_BUFFER_SIZE)
    body = _read(stream, need, name)
    if len(body) != need:
        raise MalformedContainerError("truncated fmt chunk", name)

    descriptor = None
    if size >= _FMT_FIELDS.size:
        audio_format, channels, sample_rate, _, _, bits = _FMT_FIELDS.unpack_from(body)
        descriptor = FormatDescriptor(
            audio_format=audio_format,
            channels=channels,
            sample_rate=sample_rate,
            bits_per_sample=bits,
        )

    _skip(stream, size - need, name)
    return descriptor


def parse_wav(stream: BinaryIO, name: str) -> AudioSource:
    """Locate the PCM payload of a WAV stream and validate its format.

    The stream's read position is advanced as a side effect; callers that
    copy the payload must seek to ``data_offset`` themselves.

    Args:
        stream: Binary, seekable file object positioned at the RIFF header.
        name: Input identifier used in diagnostics.

    Returns:
        AudioSource with the payload offset and declared size.

    Raises:
        MalformedContainerError: Bad signature, truncated header or fmt body,
            or a failed read or seek.
        MissingChunkError: The stream ended before fmt and data were seen.
        UnsupportedFormatError: The fmt chunk is not 44.1kHz/16-bit/stereo PCM.
    """
    header = _read(stream, _RIFF_HEADER.size, name)
    if len(header) != _RIFF_HEADER.size:
        raise MalformedContainerError("cannot read RIFF header", name)
    riff, _, wave = _RIFF_HEADER.unpack(header)
    if riff != b"RIFF" or wave != b"WAVE":
        raise MalformedContainerError("not a RIFF/WAVE file", name)

    descriptor = None  # type: Optional[FormatDescriptor]
    data_offset = None  # type: Optional[int]
    data_size = 0

    while descriptor is None or data_offset is None:
        chunk_header = _read(stream, _CHUNK_HEADER.size, name)
        if len(chunk_header) != _CHUNK_HEADER.size:
            break
        tag, size = _CHUNK_HEADER.unpack(chunk_header)
        kind = ChunkKind.from_tag(tag)
        logger.debug("%s: chunk %r (%s, %d bytes)", name, tag, kind.name, size)

        if kind is ChunkKind.FORMAT:
            found = _read_format(stream, size, name)
            if found is not None:
                descriptor = found
        elif kind is ChunkKind.DATA:
            try:
                data_offset = stream.tell()
            except (OSError, ValueError) as e:
                raise MalformedContainerError("tell failed ({})".format(e), name) from e
            data_size = size
            _skip(stream, size, name)
        else:
            _skip(stream, size, name)

        # RIFF word alignment
        if size & 1:
            _skip(stream, 1, name)

    if descriptor is None or data_offset is None:
        missing = []
        if descriptor is None:
            missing.append("fmt")
        if data_offset is None:
            missing.append("data")
        raise MissingChunkError(missing, name)

    if not descriptor.matches_cdda():
        raise UnsupportedFormatError(descriptor, name)

    return AudioSource(path=name, data_offset=data_offset, data_size=data_size)


def open_input(path: str) -> BinaryIO:
    """Open a WAV input for binary reading.

    Raises:
        UsageError: If the file cannot be opened.
    """
    try:
        return open(path, "rb")
    except OSError as e:
        raise UsageError("cannot open input ({})".format(e.strerror or e), path) from e
