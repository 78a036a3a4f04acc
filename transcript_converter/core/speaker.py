"""Speaker extraction from the first line of a cue.

WHY: SRT files and JSON subtitle arrays put the speaker inline
("Adam Curry: podcasting 2.0"), WebVTT uses voice tags ("<v Adam>hi").
Parsers hand the first text line here and store the speaker separately.

RULES:
- "Name: rest" only when the name starts with a letter and has at least
  two characters, so clock-like text ("2: apples", "starts at 2:30") and
  a bare "Adam:" are left alone
- "<v Name>rest" (optionally "<v.class Name>"), closing "</v>" dropped
- First match wins; no match returns ("", left-stripped text)
"""

from __future__ import annotations

import re
from typing import NamedTuple

_SPEAKER_RE = re.compile(r"^(?P<speaker>[^\W\d_].+?): (?P<body>.*)$", re.DOTALL)

_VOICE_TAG_RE = re.compile(
    r"^<v(?:\.[\w.-]+)?\s+(?P<speaker>[^>]+?)\s*>(?P<body>.*)$", re.DOTALL
)

_VOICE_CLOSE_RE = re.compile(r"</v>\s*$")


class SpeakerMatch(NamedTuple):
    speaker: str
    message: str


def parse_speaker(data: str) -> SpeakerMatch:
    """Split a leading speaker marker off a line of text.

    Args:
        data: One line of cue text.

    Returns:
        SpeakerMatch(speaker, message). speaker is "" when no marker found.
    """
    text = data.lstrip()

    match = _SPEAKER_RE.match(text)
    if match is not None:
        return SpeakerMatch(match.group("speaker"), match.group("body"))

    match = _VOICE_TAG_RE.match(text)
    if match is not None:
        body = _VOICE_CLOSE_RE.sub("", match.group("body")).lstrip()
        return SpeakerMatch(match.group("speaker"), body)

    return SpeakerMatch("", text)
