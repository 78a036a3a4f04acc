"""WebVTT parser.

WHY: WebVTT cues use the SRT layout with a "WEBVTT" file header, optional
cue numbers and "." as the millisecond separator, so the SRT scanner does
the real work.

RULES:
- Data must start with "WEBVTT"
- The header block (the WEBVTT line plus header metadata such as
  "Kind: captions" up to the first blank line) is dropped
- Cues are parsed with index_optional=True; cue settings are ignored
- Speakers come from "Name: text" or "<v Name>text" voice tags
"""

from __future__ import annotations

from typing import List, Optional

from transcript_converter.core.errors import FormatError
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions
from transcript_converter.formats.base import BaseParser
from transcript_converter.formats.srt import LINE_SEPARATOR_RE, parse_srt

VTT_HEADER = "WEBVTT"


def is_vtt(data: str) -> bool:
    return data.startswith(VTT_HEADER)


def _strip_header(data: str) -> str:
    lines = LINE_SEPARATOR_RE.split(data)
    position = 1
    # Header metadata runs until a blank line or the first cue timing
    while (
        position < len(lines)
        and lines[position].strip() != ""
        and "-->" not in lines[position]
    ):
        position += 1
    return "\n".join(lines[position:]).lstrip()


def parse_vtt(data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
    """Parse WebVTT text into segments.

    Raises:
        FormatError: If ``data`` does not start with the WEBVTT header or
                     its first cue cannot be parsed.
    """
    if not is_vtt(data):
        raise FormatError("Data is not valid VTT format")
    return parse_srt(_strip_header(data), options, index_optional=True)


class VTTParser(BaseParser):
    """WebVTT (.vtt) transcript parser."""

    format = TranscriptFormat.VTT

    @property
    def name(self) -> str:
        return "WebVTT"

    def detect(self, data: str) -> bool:
        return is_vtt(data)

    def parse(self, data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
        return parse_vtt(data, options)
