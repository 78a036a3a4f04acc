"""HTML transcript parser.

WHY: Podcast hosts publish transcripts as HTML where every turn is a
``<cite>`` speaker, a ``<time>`` start time and a ``<p>`` body. There are
no end times; a turn ends when the next one starts.

HOW: BeautifulSoup (html.parser backend) builds the tree. The cite/time/p
elements under <body> (or <html>) are folded in document order through a
three-state accumulator:

    EMPTY --cite--> HAS_CITE --time--> HAS_CITE_AND_TIME --p--> emit, EMPTY

Anything out of order is logged and skipped, so duplicated or missing
tags lose only the affected turn.

RULES:
- A new <cite> always starts a new turn; an unfinished turn is abandoned
- A second <time> in the same turn is ignored
- A <p> without a preceding cite and time is ignored
- An empty cite reuses the previous speaker; ":" is removed from names
- end_time is 0 until the next turn starts; the last turn keeps 0
- An unfinished turn at the end of the document is dropped
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from transcript_converter.core.errors import FormatError, GrammarError
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions
from transcript_converter.core.segments import SegmentCombiner
from transcript_converter.core.timestamp import parse_timestamp
from transcript_converter.formats.base import BaseParser

logger = logging.getLogger(__name__)

_HTML_TAG_RE = re.compile(r"^(?:<!DOCTYPE[^>]*>\s*)?< *html\b[^>]*>", re.IGNORECASE)

_TRANSCRIPT_TAGS = ["cite", "time", "p"]


class _State(enum.Enum):
    EMPTY = "empty"
    HAS_CITE = "has_cite"
    HAS_CITE_AND_TIME = "has_cite_and_time"


@dataclass
class _Turn:
    """Accumulator for the turn being scanned."""

    state: _State = _State.EMPTY
    cite: str = ""
    time: str = ""


def is_html(data: str) -> bool:
    text = data.strip()
    return text.startswith("<!--") or _HTML_TAG_RE.match(text) is not None


def _find_root(soup: BeautifulSoup) -> Tag:
    html = soup.find("html")
    if html is None:
        raise FormatError("HTML transcript has no <html> element")
    body = html.find("body")
    return body if body is not None else html


def _speaker_from_cite(cite: str, last_speaker: str) -> str:
    speaker = cite.replace(":", "").rstrip()
    return speaker or last_speaker


def parse_html(data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
    """Parse an HTML transcript into segments.

    Raises:
        FormatError: If ``data`` is not HTML or has no <html> element.
    """
    if not is_html(data):
        raise FormatError("Data is not valid HTML format")

    soup = BeautifulSoup(data, "html.parser")
    root = _find_root(soup)

    combiner = SegmentCombiner(options)
    last_speaker = ""
    turn = _Turn()

    for count, element in enumerate(root.find_all(_TRANSCRIPT_TAGS)):
        if element.name == "cite":
            if turn.state is not _State.EMPTY:
                logger.warning(
                    "Element %d: <cite> before the previous turn finished, dropping %r",
                    count,
                    turn.cite,
                )
            turn = _Turn(state=_State.HAS_CITE, cite=element.get_text())

        elif element.name == "time":
            if turn.state is _State.HAS_CITE:
                turn.time = element.get_text()
                turn.state = _State.HAS_CITE_AND_TIME
            else:
                logger.warning("Element %d: unexpected <time>, ignoring", count)

        elif turn.state is not _State.HAS_CITE_AND_TIME:
            logger.warning("Element %d: <p> without <cite> and <time>, ignoring", count)

        else:
            finished, turn = turn, _Turn()
            try:
                start_time = parse_timestamp(finished.time)
            except GrammarError as exc:
                logger.warning("Element %d: invalid time %r, dropping turn: %s", count, finished.time, exc)
                continue

            speaker = _speaker_from_cite(finished.cite, last_speaker)
            last_speaker = speaker
            segment = Segment(
                start_time=start_time,
                end_time=0,
                speaker=speaker,
                body=element.decode_contents().strip(),
            )

            if combiner.segments:
                combiner.segments[-1].end_time = start_time
            combiner.add(segment)

    if turn.state is not _State.EMPTY:
        logger.warning("Unfinished turn at end of document, dropping %r", turn.cite)

    return combiner.segments


class HTMLParser(BaseParser):
    """HTML citation transcript parser."""

    format = TranscriptFormat.HTML

    @property
    def name(self) -> str:
        return "HTML transcript"

    def detect(self, data: str) -> bool:
        return is_html(data)

    def parse(self, data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
        return parse_html(data, options)
