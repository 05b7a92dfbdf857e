"""Configuration constants, the CDDA target profile, and .env loading.

WHY: Centralizes every fixed number of the Red Book audio layout (sector
size, frame rate, sample format) so the parser, assembler and cue sheet
formatter agree on them, and keeps the few tunable values in one place.

HOW: python-dotenv loads the .env file on import. Constants are defined
as module-level values. Tunables are read from the environment with
os.getenv and validated by small loader functions.

RULES:
- SECTOR_SIZE is 2352 bytes (588 stereo 16-bit samples)
- 75 sectors per second; one cue timecode frame is one sector
- Output file names are fixed and deliberately not overridable
- MKCDDA_LOG_LEVEL and MKCDDA_COPY_BUFFER_SIZE may come from .env
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# CDDA layout
# ---------------------------------------------------------------------------

SECTOR_SIZE = 2352
"""Bytes per raw audio sector."""

FRAMES_PER_SECOND = 75
SECONDS_PER_MINUTE = 60
FRAMES_PER_MINUTE = FRAMES_PER_SECOND * SECONDS_PER_MINUTE

# ---------------------------------------------------------------------------
# Required input profile
# ---------------------------------------------------------------------------

WAVE_FORMAT_PCM = 1
CDDA_CHANNELS = 2
CDDA_SAMPLE_RATE = 44100
CDDA_BITS_PER_SAMPLE = 16

# ---------------------------------------------------------------------------
# Outputs
# ---------------------------------------------------------------------------

BIN_FILENAME = "disc.bin"
CUE_FILENAME = "disc.cue"

PREGAP = "00:02:00"
"""Pregap declared before track 1 in the cue sheet (no bytes in the image)."""

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

DEFAULT_COPY_BUFFER_SIZE = 8192
LOG_LEVEL = os.getenv("MKCDDA_LOG_LEVEL", "WARNING").upper()


def load_copy_buffer_size() -> int:
    """Load the payload copy buffer size from the environment.

    WHY: Payloads are streamed in bounded chunks. The default suits local
    disks; the value can be raised for slow network mounts.

    HOW: Reads MKCDDA_COPY_BUFFER_SIZE (populated by python-dotenv),
    falling back to DEFAULT_COPY_BUFFER_SIZE.

    RULES:
    - Raises ValueError if the value is not a positive integer
    """
    raw = os.getenv("MKCDDA_COPY_BUFFER_SIZE", "").strip()
    if not raw:
        return DEFAULT_COPY_BUFFER_SIZE
    try:
        size = int(raw)
    except ValueError:
        raise ValueError(
            "MKCDDA_COPY_BUFFER_SIZE must be an integer, got {!r}".format(raw)
        ) from None
    if size <= 0:
        raise ValueError(
            "MKCDDA_COPY_BUFFER_SIZE must be positive, got {}".format(size)
        )
    return size
