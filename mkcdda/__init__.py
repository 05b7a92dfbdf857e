"""mkcdda: minimalist WAV to CDDA (BIN/CUE) converter.

WHY: Disc burning tools want a raw audio CD image plus a cue sheet, not a
folder of WAV files. This package lays PCM WAV payloads out as 2352-byte
CDDA sectors and indexes the track starts in a cue sheet.

HOW: Three-stage pipeline: parse (RIFF/WAVE container), assemble (sector
stream + track layout), format (cue sheet). Each stage is independently
testable.

RULES:
- Only 44.1 kHz / 16-bit / stereo PCM is accepted
- Every track is zero-padded to a whole number of sectors
- The Disc layout is the stable contract between assembly and formatting
"""

__version__ = "0.1.0"
