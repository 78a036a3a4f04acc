"""Transcript format sniffing.

HOW: Each registered parser's detect() is asked in a fixed order on the
stripped text; the first one that claims the data wins.

RULES (order of DETECTION_ORDER):
1. Starts with "WEBVTT" → VTT
2. Wrapped in {} or [] → JSON
3. Starts with "<!--" or an <html> tag (after an optional DOCTYPE) → HTML
4. First 20 lines parse as an SRT cue → SRT
Otherwise FormatError, chained with the SRT probe's GrammarError.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from transcript_converter.config import SRT_PROBE_LINE_COUNT
from transcript_converter.core.errors import FormatError, GrammarError
from transcript_converter.core.ir import TranscriptFormat
from transcript_converter.formats import PARSERS
from transcript_converter.formats.srt import LINE_SEPARATOR_RE, parse_srt_segment

logger = logging.getLogger(__name__)

# WebVTT bodies look like SRT and may contain JSON or HTML, so VTT goes first
DETECTION_ORDER: Tuple[TranscriptFormat, ...] = (
    TranscriptFormat.VTT,
    TranscriptFormat.JSON,
    TranscriptFormat.HTML,
    TranscriptFormat.SRT,
)


def _srt_probe_error(text: str) -> Optional[GrammarError]:
    try:
        parse_srt_segment(LINE_SEPARATOR_RE.split(text)[:SRT_PROBE_LINE_COUNT])
    except GrammarError as exc:
        return exc
    return None


def determine_format(data: str) -> TranscriptFormat:
    """Work out which format ``data`` is in.

    Raises:
        FormatError: If no format matches.
    """
    text = data.strip()

    for transcript_format in DETECTION_ORDER:
        parser = PARSERS[transcript_format]()
        if parser.detect(text):
            logger.debug("Detected %s input", parser.name)
            return transcript_format

    raise FormatError("Cannot determine format") from _srt_probe_error(text)
