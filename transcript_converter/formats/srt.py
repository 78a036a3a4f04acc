"""SubRip (SRT) parser.

WHY: SRT is the most common caption exchange format and WebVTT cues share
its layout, so this module does the cue scanning for both.

HOW: Input is split into lines and buffered until a blank line; each
buffered cue goes through parse_srt_segment(), gets the carried-forward
speaker when it has none, and is folded into the output by the
SegmentCombiner.

RULES:
- A cue is: index line, "start --> end" line, one or more body lines
- index_optional=True (WebVTT) allows cues without an index line
- The first body line may carry a speaker ("Adam: hello")
- A cue that fails to parse is logged and skipped; the rest still converts
- Data is rejected up front when its first cue cannot be parsed
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from transcript_converter.config import SRT_PROBE_LINE_COUNT
from transcript_converter.core.errors import FormatError, GrammarError
from transcript_converter.core.ir import Segment, SRTSegment, TranscriptFormat
from transcript_converter.core.options import CombineOptions
from transcript_converter.core.segments import SegmentCombiner
from transcript_converter.core.speaker import parse_speaker
from transcript_converter.core.timestamp import parse_timestamp
from transcript_converter.formats.base import BaseParser

logger = logging.getLogger(__name__)

LINE_SEPARATOR_RE = re.compile(r"\r?\n")

_TIMESTAMP_SEPARATOR = "-->"


def _parse_index(line: str) -> int:
    try:
        return int(line.strip())
    except ValueError:
        return 0


def parse_srt_segment(lines: List[str], index_optional: bool = False) -> SRTSegment:
    """Parse the lines of a single SRT cue.

    Args:
        lines: Cue lines. Leading blank lines are skipped; anything after
               the first blank body line is ignored.
        index_optional: Accept a cue without an index line (index -1).

    Returns:
        The parsed SRTSegment. ``speaker`` is "" when the first body line
        has no speaker prefix.

    Raises:
        GrammarError: If the lines are empty, too few, lack an index (when
                      required), or the timestamp line is malformed.
    """
    remaining = list(lines)
    while remaining and remaining[0].strip() == "":
        remaining.pop(0)
    if not remaining:
        raise GrammarError("SRT segment lines empty")

    min_line_count = 2 if index_optional else 3
    if len(remaining) < min_line_count:
        raise GrammarError(
            "SRT requires at least {} lines, {} received".format(min_line_count, len(remaining))
        )

    position = 0
    index = _parse_index(remaining[position])
    position += 1
    if not index:
        if not index_optional:
            raise GrammarError("First line of SRT segment is not a number")
        index = -1
        position = 0

    if position >= len(remaining):
        raise GrammarError("SRT segment has no timestamp line")
    timestamp_line = remaining[position]
    position += 1
    if _TIMESTAMP_SEPARATOR not in timestamp_line:
        raise GrammarError("SRT timestamp line does not include --> separator")
    parts = timestamp_line.split(_TIMESTAMP_SEPARATOR)
    if len(parts) != 2:
        raise GrammarError("SRT timestamp line contains more than one --> separator")

    # WebVTT may follow the end time with cue settings ("align:start")
    end_tokens = parts[1].split()
    if not end_tokens:
        raise GrammarError("SRT timestamp line has no end time")
    start_time = parse_timestamp(parts[0].strip())
    end_time = parse_timestamp(end_tokens[0])

    body_lines = remaining[position:]
    if not body_lines:
        raise GrammarError("SRT segment has no body")
    for offset, line in enumerate(body_lines[1:], start=1):
        if line.strip() == "":
            body_lines = body_lines[:offset]
            break

    speaker, message = parse_speaker(body_lines[0])
    body = "\n".join([message] + body_lines[1:])

    return SRTSegment(
        index=index,
        start_time=start_time,
        end_time=end_time,
        speaker=speaker,
        body=body,
    )


def is_srt(data: str, index_optional: bool = False) -> bool:
    """Return True when the first cue of ``data`` parses as SRT."""
    probe = LINE_SEPARATOR_RE.split(data)[:SRT_PROBE_LINE_COUNT]
    try:
        parse_srt_segment(probe, index_optional)
    except GrammarError as exc:
        logger.debug("Unable to parse data as SRT: %s", exc)
        return False
    return True


def parse_srt(
    data: str,
    options: Optional[CombineOptions] = None,
    index_optional: bool = False,
) -> List[Segment]:
    """Parse SRT text into segments.

    Args:
        data: The SRT document.
        options: Combination rules applied to each cue.
        index_optional: Accept cues without index lines (WebVTT).

    Returns:
        Segments in source order after combination.

    Raises:
        FormatError: If ``data`` is not SRT.
    """
    if not is_srt(data, index_optional):
        raise FormatError("Data is not valid SRT format")

    combiner = SegmentCombiner(options)
    last_speaker = ""

    def _flush(cue_lines: List[str]) -> None:
        nonlocal last_speaker
        cue = parse_srt_segment(cue_lines, index_optional)
        speaker = cue.speaker or last_speaker
        last_speaker = speaker
        combiner.add(
            Segment(
                start_time=cue.start_time,
                end_time=cue.end_time,
                speaker=speaker,
                body=cue.body,
            )
        )

    cue_lines: List[str] = []
    for line_number, line in enumerate(LINE_SEPARATOR_RE.split(data), start=1):
        if line.strip() != "":
            cue_lines.append(line)
            continue
        if cue_lines:
            try:
                _flush(cue_lines)
            except GrammarError as exc:
                logger.warning(
                    "Error parsing SRT segment lines (source line %d): %s %r",
                    line_number,
                    exc,
                    cue_lines,
                )
        cue_lines = []

    # Last cue when the data has no trailing blank line
    if cue_lines:
        try:
            _flush(cue_lines)
        except GrammarError as exc:
            logger.warning("Error parsing final SRT segment lines: %s %r", exc, cue_lines)

    return combiner.segments


class SRTParser(BaseParser):
    """SubRip (.srt) transcript parser."""

    format = TranscriptFormat.SRT

    @property
    def name(self) -> str:
        return "SubRip (SRT)"

    def detect(self, data: str) -> bool:
        return is_srt(data)

    def parse(self, data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
        return parse_srt(data, options)
