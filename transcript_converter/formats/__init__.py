"""Input parser registry.

WHY: The facade and the CLI need a single lookup from a TranscriptFormat to
the parser that reads it. Adding a format means writing the parser class,
importing it here and adding one line.

HOW: PARSERS maps TranscriptFormat members to parser *classes* (not
instances). Callers instantiate as needed:
``segments = PARSERS[TranscriptFormat.SRT]().parse(data, options)``.

RULES:
- Keys are TranscriptFormat members (their values are the CLI --format names)
- Values are BaseParser subclasses (not instances)
- Every parser listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from transcript_converter.core.ir import TranscriptFormat
from transcript_converter.formats.html_transcript import HTMLParser
from transcript_converter.formats.json_transcript import JSONParser
from transcript_converter.formats.srt import SRTParser
from transcript_converter.formats.vtt import VTTParser

if TYPE_CHECKING:
    from transcript_converter.formats.base import BaseParser

PARSERS: dict[TranscriptFormat, type[BaseParser]] = {
    TranscriptFormat.HTML: HTMLParser,
    TranscriptFormat.JSON: JSONParser,
    TranscriptFormat.SRT: SRTParser,
    TranscriptFormat.VTT: VTTParser,
}
