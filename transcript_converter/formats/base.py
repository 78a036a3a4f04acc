"""Abstract base parser for transcript input formats.

WHY: The facade and the CLI need to treat SRT, WebVTT, JSON and HTML the
same way: ask whether data looks like the format, then turn it into
segments. This base class enforces that interface so the registry can be
used generically.

HOW: BaseParser is an ABC with three requirements: a ``name`` property,
``detect()`` and ``parse()``. Concrete parsers are thin wrappers around
the module-level ``is_*`` / ``parse_*`` functions, which stay usable on
their own.

RULES:
- ``detect()`` never raises on bad input; it returns False
- ``parse()`` raises FormatError when the data is not in this format
- ``parse()`` always applies the combination rules from ``options``

To add a new input format:
1. Create a new file in formats/
2. Subclass BaseParser
3. Implement name, detect() and parse()
4. Register it in the PARSERS dict in formats/__init__.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions


class BaseParser(ABC):
    """Abstract base for all transcript parsers."""

    format: TranscriptFormat

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'SubRip (SRT)'."""

    @abstractmethod
    def detect(self, data: str) -> bool:
        """Return True when ``data`` looks like this format."""

    @abstractmethod
    def parse(self, data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
        """Convert transcript text into combined segments.

        Args:
            data: The transcript text.
            options: Combination rules. None means no combining.

        Returns:
            Segments in source order after the combination rules ran.
        """
