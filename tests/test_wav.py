"""Unit tests for the RIFF/WAVE container parser.

WHY: The parser decides which bytes end up on the disc. A wrong payload
offset or an accepted non-CDDA format corrupts the image without any
crash, so each chunk-walking rule is pinned down here.

HOW: Tests feed hand-built containers (see conftest.build_wav) through
parse_wav() via io.BytesIO and check the resolved AudioSource or the
raised error type.

RULES:
- Offsets are computed from the container layout, never hardcoded blindly
- Every rejection case asserts the input name appears in the message
"""

import io
import struct

import pytest

from conftest import UnreliableStream, build_wav, chunk, fmt_body, payload_bytes
from mkcdda.core.errors import (
    MalformedContainerError,
    MissingChunkError,
    UnsupportedFormatError,
    UsageError,
)
from mkcdda.core.wav import ChunkKind, open_input, parse_wav


def _parse(data: bytes, name: str = "track.wav"):
    return parse_wav(io.BytesIO(data), name)


class TestSignature:
    """RIFF and WAVE tags must be present at offsets 0 and 8."""

    def test_missing_wave_tag(self):
        data = build_wav(payload_bytes(100), wave_tag=b"AVI ")
        with pytest.raises(MalformedContainerError) as exc:
            _parse(data, "movie.wav")
        assert "movie.wav" in str(exc.value)
        assert "RIFF/WAVE" in str(exc.value)

    def test_missing_riff_tag(self):
        data = b"RIFX" + build_wav(payload_bytes(100))[4:]
        with pytest.raises(MalformedContainerError):
            _parse(data)

    def test_short_header(self):
        with pytest.raises(MalformedContainerError) as exc:
            _parse(b"RIFF\x00\x00")
        assert "RIFF header" in str(exc.value)

    def test_empty_stream(self):
        with pytest.raises(MalformedContainerError):
            _parse(b"")


class TestChunkWalking:
    """fmt and data chunks are located; others are skipped by size."""

    def test_minimal_file_offsets(self):
        payload = payload_bytes(4700)
        source = _parse(build_wav(payload))
        # 12 RIFF header + 8 fmt header + 16 fmt body + 8 data header
        assert source.data_offset == 44
        assert source.data_size == 4700
        assert source.path == "track.wav"

    def test_unknown_chunks_skipped(self):
        payload = payload_bytes(1000)
        data = build_wav(payload, extra_chunks=[(b"LIST", b"x" * 26), (b"bext", b"y" * 10)])
        source = _parse(data)
        assert source.data_offset == 12 + (8 + 26) + (8 + 10) + (8 + 16) + 8
        assert data[source.data_offset:source.data_offset + 1000] == payload

    def test_odd_sized_unknown_chunk_pad_byte(self):
        payload = payload_bytes(500)
        data = build_wav(payload, extra_chunks=[(b"junk", b"abc")])
        source = _parse(data)
        # 3-byte chunk body is followed by one pad byte
        assert source.data_offset == 12 + (8 + 3 + 1) + (8 + 16) + 8
        assert data[source.data_offset:source.data_offset + 500] == payload

    def test_data_before_fmt(self):
        payload = payload_bytes(2352)
        data = build_wav(payload, data_first=True)
        source = _parse(data)
        assert source.data_offset == 20
        assert source.data_size == 2352

    def test_odd_sized_data_before_fmt(self):
        payload = payload_bytes(2351)
        data = build_wav(payload, data_first=True)
        source = _parse(data)
        assert source.data_offset == 20
        assert source.data_size == 2351

    def test_odd_sized_data_after_fmt(self):
        payload = payload_bytes(2351)
        data = build_wav(payload)
        source = _parse(data)
        assert source.data_offset == 44
        assert source.data_size == 2351
        # pad byte after the data body is part of the container, not the payload
        assert len(data) == 44 + 2351 + 1
        assert data[44:44 + 2351] == payload

    def test_extended_fmt_chunk(self):
        """fmt bodies longer than the 40-byte buffer are skipped past."""
        fmt = fmt_body(extra=struct.pack("<H", 46) + b"\x00" * 46)
        payload = payload_bytes(64)
        source = _parse(build_wav(payload, fmt=fmt))
        assert source.data_offset == 12 + 8 + len(fmt) + 8

    def test_stream_position_is_advanced(self):
        stream = io.BytesIO(build_wav(payload_bytes(100)))
        parse_wav(stream, "a.wav")
        assert stream.tell() > 12

    def test_chunk_kind_classification(self):
        assert ChunkKind.from_tag(b"fmt ") is ChunkKind.FORMAT
        assert ChunkKind.from_tag(b"data") is ChunkKind.DATA
        assert ChunkKind.from_tag(b"LIST") is ChunkKind.UNKNOWN
        assert ChunkKind.from_tag(b"fmt") is ChunkKind.UNKNOWN


class TestMissingChunks:
    """End of stream before fmt and data were both seen."""

    def test_missing_data(self):
        with pytest.raises(MissingChunkError) as exc:
            _parse(build_wav(b"", include_data=False), "nodata.wav")
        assert exc.value.missing == ("data",)
        assert "nodata.wav" in str(exc.value)

    def test_missing_fmt(self):
        with pytest.raises(MissingChunkError) as exc:
            _parse(build_wav(payload_bytes(10), include_fmt=False))
        assert exc.value.missing == ("fmt",)

    def test_missing_both(self):
        with pytest.raises(MissingChunkError) as exc:
            _parse(build_wav(b"", include_fmt=False, include_data=False))
        assert exc.value.missing == ("fmt", "data")

    def test_short_fmt_chunk_not_counted(self):
        data = build_wav(payload_bytes(10), fmt=b"\x01\x00\x02\x00")
        with pytest.raises(MissingChunkError) as exc:
            _parse(data)
        assert exc.value.missing == ("fmt",)

    def test_truncated_chunk_header_ends_scan(self):
        data = build_wav(b"", include_data=False) + b"da"
        with pytest.raises(MissingChunkError):
            _parse(data)


class TestTruncatedFormat:
    def test_fmt_body_shorter_than_declared(self):
        header = struct.pack("<4sI4s", b"RIFF", 100, b"WAVE")
        data = header + struct.pack("<4sI", b"fmt ", 16) + b"\x01\x00\x02\x00"
        with pytest.raises(MalformedContainerError) as exc:
            _parse(data)
        assert "fmt" in str(exc.value)


class TestFormatValidation:
    """Only 44.1kHz, 16-bit, stereo, uncompressed PCM is accepted."""

    @pytest.mark.parametrize("kwargs", [
        {"sample_rate": 48000},
        {"sample_rate": 22050},
        {"channels": 1},
        {"bits_per_sample": 24},
        {"audio_format": 3},
    ])
    def test_rejects_profile_mismatch(self, kwargs):
        data = build_wav(payload_bytes(100), fmt=fmt_body(**kwargs))
        with pytest.raises(UnsupportedFormatError) as exc:
            _parse(data, "hires.wav")
        assert "hires.wav" in str(exc.value)
        assert "44.1kHz, 16-bit, stereo PCM" in str(exc.value)

    def test_48k_reports_descriptor(self):
        data = build_wav(payload_bytes(100), fmt=fmt_body(sample_rate=48000))
        with pytest.raises(UnsupportedFormatError) as exc:
            _parse(data)
        assert exc.value.descriptor.sample_rate == 48000
        assert "48000 Hz" in str(exc.value)

    def test_cdda_profile_accepted(self):
        source = _parse(build_wav(payload_bytes(100)))
        assert source.data_size == 100


class TestTruncatedData:
    def test_declared_size_kept_when_data_truncated(self):
        """The parser only seeks; short payloads surface when copying."""
        data = build_wav(payload_bytes(100), declared_data_size=5000)
        source = _parse(data)
        assert source.data_size == 5000


class TestOpenInput:
    def test_missing_file_is_usage_error(self, tmp_path):
        missing = str(tmp_path / "absent.wav")
        with pytest.raises(UsageError) as exc:
            open_input(missing)
        assert "absent.wav" in str(exc.value)

    def test_opens_existing_file(self, write_wav):
        path = write_wav("ok.wav", payload_bytes(10))
        with open_input(path) as stream:
            assert parse_wav(stream, path).data_size == 10


def test_chunk_helper_pads_odd_bodies():
    assert len(chunk(b"abcd", b"xyz")) == 8 + 4


class TestStreamFailures:
    """I/O errors on the input surface as MalformedContainerError."""

    @pytest.mark.parametrize("fails_at", [
        0,   # RIFF header
        12,  # first chunk header
        20,  # fmt body
    ])
    def test_read_error(self, fails_at):
        stream = UnreliableStream(build_wav(payload_bytes(100)), read_fails_at=fails_at)
        with pytest.raises(MalformedContainerError) as exc:
            parse_wav(stream, "scratched.wav")
        assert "scratched.wav" in str(exc.value)
        assert "read error" in str(exc.value)
        assert isinstance(exc.value.__cause__, OSError)

    def test_seek_error(self):
        data = build_wav(payload_bytes(100), extra_chunks=[(b"LIST", b"INFO")])
        stream = UnreliableStream(data, seek_fails=True)
        with pytest.raises(MalformedContainerError) as exc:
            parse_wav(stream, "pipe.wav")
        assert "seek failed" in str(exc.value)
        assert "pipe.wav" in str(exc.value)

    def test_tell_error(self):
        stream = UnreliableStream(build_wav(payload_bytes(100)), tell_fails=True)
        with pytest.raises(MalformedContainerError) as exc:
            parse_wav(stream, "pipe.wav")
        assert "tell failed" in str(exc.value)
