"""Data model dataclasses for parsed sources and the assembled disc layout.

WHY: The parser, assembler and cue sheet formatter each see the same
audio from a different angle: a chunk inside a container, a run of
sectors in the image, a line in the cue sheet. Small typed records keep
those views consistent and decouple assembly from formatting.

HOW: Four dataclasses plus the sector arithmetic they share:
  FormatDescriptor : fields of the fmt chunk, used only for validation
  AudioSource      : where one input's payload lives and how long it is
  Track            : an AudioSource placed at a starting sector
  Disc             : the complete layout handed to formatters

RULES:
- AudioSource is frozen; it is resolved once by the parser
- Track numbers are 1-based, in input order
- pad_length(n) is in [0, SECTOR_SIZE) and n + pad_length(n) is a
  multiple of SECTOR_SIZE
- Disc.total_sectors == sum of every track's sector_count
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from mkcdda.config import (
    CDDA_BITS_PER_SAMPLE,
    CDDA_CHANNELS,
    CDDA_SAMPLE_RATE,
    SECTOR_SIZE,
    WAVE_FORMAT_PCM,
)
from mkcdda.core.timecode import CueTimecode


def pad_length(size: int) -> int:
    """Zero bytes needed to extend ``size`` to the next sector boundary."""
    return (SECTOR_SIZE - (size % SECTOR_SIZE)) % SECTOR_SIZE


def padded_sector_count(size: int) -> int:
    """Number of whole sectors ``size`` payload bytes occupy once padded."""
    return (size + pad_length(size)) // SECTOR_SIZE


@dataclass
class FormatDescriptor:
    """Audio encoding fields from a WAV ``fmt `` chunk.

    RULES:
    - audio_format: WAVE format tag (1 = uncompressed PCM)
    - sample_rate: samples per second per channel
    - Only the first 16 bytes of the chunk body are decoded
    """

    audio_format: int
    channels: int
    sample_rate: int
    bits_per_sample: int

    def matches_cdda(self) -> bool:
        """True for uncompressed 44.1kHz, 16-bit, stereo PCM."""
        return (
            self.audio_format == WAVE_FORMAT_PCM
            and self.channels == CDDA_CHANNELS
            and self.sample_rate == CDDA_SAMPLE_RATE
            and self.bits_per_sample == CDDA_BITS_PER_SAMPLE
        )


@dataclass(frozen=True)
class AudioSource:
    """Location of one input's PCM payload inside its container.

    WHY: The assembler must copy payload bytes without re-parsing the
    container. The parser resolves the byte range once and hands it over.

    RULES:
    - path: input identifier as given on the command line
    - data_offset: absolute byte offset of the data chunk body
    - data_size: declared data chunk size in bytes (no pad byte)
    """

    path: str
    data_offset: int
    data_size: int

    @property
    def pad_bytes(self) -> int:
        return pad_length(self.data_size)

    @property
    def padded_size(self) -> int:
        return self.data_size + self.pad_bytes

    @property
    def sector_count(self) -> int:
        return padded_sector_count(self.data_size)


@dataclass
class Track:
    """An AudioSource placed in the disc image.

    RULES:
    - number: 1-based position in input order
    - start_sector: running total of the padded sector counts of all
      previous tracks (0 for the first track)
    """

    number: int
    source: AudioSource
    start_sector: int

    @property
    def timecode(self) -> CueTimecode:
        return CueTimecode.from_sectors(self.start_sector)

    @property
    def end_sector(self) -> int:
        return self.start_sector + self.source.sector_count


@dataclass
class Disc:
    """The assembled disc layout that formatters receive.

    RULES:
    - image_name: file name of the binary image as referenced by the cue sheet
    - tracks: ordered by track number
    - total_sectors: length of the image in sectors
    """

    image_name: str
    tracks: List[Track] = field(default_factory=list)
    total_sectors: int = 0

    @property
    def total_bytes(self) -> int:
        return self.total_sectors * SECTOR_SIZE
