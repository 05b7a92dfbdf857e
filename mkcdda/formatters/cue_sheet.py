"""CUE sheet formatter for single-file BINARY audio images.

WHY: Burning tools need a cue sheet to know where each track starts in
the raw image. The image itself has no headers, so the cue sheet is the
only record of the track layout.

HOW: Emits one FILE line naming the image, then per track a TRACK line
and an INDEX 01 line whose timecode is the track's start sector rendered
as MM:SS:FF. Track 1 additionally declares a 2-second PREGAP.

RULES:
- Header: FILE "<image>" BINARY
- Track lines: two-space indent, 2-digit zero-padded number, AUDIO type
- Index/pregap lines: four-space indent
- PREGAP 00:02:00 only under TRACK 01; the image contains no silence for it
- Every line ends with "\\n"
- Output suffix: ".cue", media type: "application/x-cue"
"""

from __future__ import annotations

from typing import List

from mkcdda.config import PREGAP
from mkcdda.core.ir import Disc
from mkcdda.formatters.base import BaseFormatter, FormatterOutput


def render_cue_sheet(disc: Disc) -> str:
    """Render the cue sheet text for a Disc layout."""
    lines: List[str] = ['FILE "{}" BINARY'.format(disc.image_name)]
    for track in disc.tracks:
        lines.append("  TRACK {:02d} AUDIO".format(track.number))
        if track.number == 1:
            lines.append("    PREGAP {}".format(PREGAP))
        lines.append("    INDEX 01 {}".format(track.timecode))
    return "".join(line + "\n" for line in lines)


class CueSheetFormatter(BaseFormatter):
    """Formatter that produces the ``.cue`` index for the disc image."""

    @property
    def name(self) -> str:
        return "CUE Sheet"

    def format(self, disc: Disc) -> List[FormatterOutput]:
        return [
            FormatterOutput(
                suffix=".cue",
                content=render_cue_sheet(disc),
                media_type="application/x-cue",
            )
        ]
