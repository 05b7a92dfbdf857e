"""Exception taxonomy for the WAV to CDDA conversion.

WHY: Callers (the CLI, tests) need typed exceptions to tell a bad input
apart from a failing output disk, and every diagnostic must name the
offending input so a failed run can be understood without re-running it.

HOW: All errors derive from MkcddaError, which prefixes the message with
the input name when one is known. Subclasses carry the extra detail
their failure mode has (missing chunk names, the rejected descriptor,
byte counts).

RULES:
- Every error is fatal to the whole run; nothing here is retried
- source is the input identifier (path as given), or None
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from mkcdda.core.ir import FormatDescriptor


class MkcddaError(Exception):
    """Base class for every conversion failure."""

    def __init__(self, message: str, source: Optional[str] = None) -> None:
        self.source = source
        self.message = message
        if source:
            super().__init__("{}: {}".format(source, message))
        else:
            super().__init__(message)


class MalformedContainerError(MkcddaError):
    """Raised when the RIFF/WAVE signature is missing or the container is unreadable.

    Covers a short RIFF header, a truncated format chunk body, and seek
    failures while skipping chunks.
    """


class MissingChunkError(MkcddaError):
    """Raised when the stream ends before both fmt and data chunks were seen."""

    def __init__(self, missing: Sequence[str], source: Optional[str] = None) -> None:
        self.missing = tuple(missing)
        super().__init__(
            "missing {} chunk".format(" and ".join(self.missing)),
            source,
        )


class UnsupportedFormatError(MkcddaError):
    """Raised when the fmt chunk does not describe 44.1kHz, 16-bit, stereo PCM."""

    def __init__(self, descriptor: FormatDescriptor, source: Optional[str] = None) -> None:
        self.descriptor = descriptor
        super().__init__(
            "must be 44.1kHz, 16-bit, stereo PCM "
            "(got format {}, {} channel(s), {} Hz, {}-bit)".format(
                descriptor.audio_format,
                descriptor.channels,
                descriptor.sample_rate,
                descriptor.bits_per_sample,
            ),
            source,
        )


class TruncatedPayloadError(MkcddaError):
    """Raised when the data chunk ends before its declared size was copied."""

    def __init__(self, expected: int, copied: int, source: Optional[str] = None) -> None:
        self.expected = expected
        self.copied = copied
        super().__init__(
            "short read ({} of {} payload bytes)".format(copied, expected),
            source,
        )


class OutputWriteFailedError(MkcddaError):
    """Raised when writing the disc image or cue sheet fails."""


class ResourceExhaustedError(MkcddaError):
    """Raised when memory for bookkeeping runs out."""


class UsageError(MkcddaError):
    """Raised when no inputs are given or an input cannot be opened."""
