"""Abstract base formatter and output container.

WHY: Text outputs describing the disc (the cue sheet) consume the same
Disc layout. This base class keeps a consistent interface so the CLI and
tests can drive any formatter generically.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content (string or bytes) and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``format()`` returns a list of outputs
- ``suffix`` starts with a dot, e.g. ``".cue"``
- The caller is responsible for prepending the output stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from mkcdda.core.ir import Disc


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the output stem,
                e.g. ``".cue"`` → ``"disc.cue"``.
        content: The file content as a string or bytes.
        media_type: MIME type for the content, e.g. ``"application/x-cue"``.
    """

    suffix: str
    content: str | bytes
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all disc layout formatters.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'CUE Sheet'."""

    @abstractmethod
    def format(self, disc: Disc) -> list[FormatterOutput]:
        """Convert the Disc layout into one or more output files.

        Args:
            disc: The assembled layout: image name, ordered tracks with
                  their start sectors, and the total sector count.

        Returns:
            List of FormatterOutput objects, each containing a file suffix,
            content string/bytes, and MIME type.
        """
