"""Minutes:seconds:frames timecodes for cue sheet addressing.

WHY: Cue sheets address positions in MM:SS:FF, where a frame is 1/75 s,
which on an audio CD is exactly one 2352-byte sector. Track start sectors
from the assembler must be rendered in that notation without drift.

HOW: CueTimecode is a frozen value type. from_sectors() splits a sector
index with integer division; to_sectors() folds it back; str() renders
the zero-padded text form.

RULES:
- minutes = sector // 4500, seconds = (sector // 75) % 60, frames = sector % 75
- frames is always in [0, 75); seconds in [0, 60)
- to_sectors(from_sectors(s)) == s for every s >= 0
- minutes is not capped; values past 99 render with more digits
"""

from __future__ import annotations

from dataclasses import dataclass

from mkcdda.config import FRAMES_PER_MINUTE, FRAMES_PER_SECOND, SECONDS_PER_MINUTE


@dataclass(frozen=True)
class CueTimecode:
    """A disc position in minutes, seconds and frames."""

    minutes: int
    seconds: int
    frames: int

    def __post_init__(self) -> None:
        if self.minutes < 0:
            raise ValueError("minutes must be non-negative, got {}".format(self.minutes))
        if not 0 <= self.seconds < SECONDS_PER_MINUTE:
            raise ValueError("seconds must be in [0, 60), got {}".format(self.seconds))
        if not 0 <= self.frames < FRAMES_PER_SECOND:
            raise ValueError("frames must be in [0, 75), got {}".format(self.frames))

    @classmethod
    def from_sectors(cls, sectors: int) -> CueTimecode:
        """Convert a sector index (one sector per frame) to a timecode."""
        if sectors < 0:
            raise ValueError("sector index must be non-negative, got {}".format(sectors))
        return cls(
            minutes=sectors // FRAMES_PER_MINUTE,
            seconds=(sectors // FRAMES_PER_SECOND) % SECONDS_PER_MINUTE,
            frames=sectors % FRAMES_PER_SECOND,
        )

    def to_sectors(self) -> int:
        return self.minutes * FRAMES_PER_MINUTE + self.seconds * FRAMES_PER_SECOND + self.frames

    def __str__(self) -> str:
        return "{:02d}:{:02d}:{:02d}".format(self.minutes, self.seconds, self.frames)
