"""Output formatter registry.

WHY: The CLI needs a single lookup to find formatters by name. A central
dict keeps adding another description of the disc layout a one-line
change.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["cue"]()``.

RULES:
- Keys are snake_case identifiers
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mkcdda.formatters.cue_sheet import CueSheetFormatter

if TYPE_CHECKING:
    from mkcdda.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "cue": CueSheetFormatter,
}
