"""JSON transcript parser.

WHY: Two JSON shapes show up in practice: the podcast-namespace transcript
object ({"segments": [...]} with times in seconds) and plain subtitle
arrays ([{"start", "end", "text"}] with times in milliseconds).

HOW: The top-level value picks the shape. Each shape is checked with
jsonschema before any segment is built, so a bad document fails as a
whole instead of converting halfway.

RULES:
- {} and [] convert to no segments
- An object without "segments" is rejected
- Array times are milliseconds (number or numeric string); a time that is
  not a number raises GrammarError for the whole document
- Array text goes through speaker extraction and the last speaker carries
  forward to items without one
- Any other top-level value is rejected
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Dict, List, Optional, Union

import jsonschema

from transcript_converter.core.errors import FormatError, GrammarError
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions
from transcript_converter.core.segments import SegmentCombiner
from transcript_converter.core.speaker import parse_speaker
from transcript_converter.formats.base import BaseParser

logger = logging.getLogger(__name__)

TRANSCRIPT_SEGMENTS_SCHEMA: Dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "startTime": {"type": "number"},
            "endTime": {"type": "number"},
            "speaker": {"type": "string"},
            "body": {"type": "string"},
        },
        "required": ["startTime", "endTime", "body"],
    },
}
"""Schema for the "segments" array of a transcript object."""

SUBTITLE_ITEM_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "start": {"type": ["number", "string"]},
        "end": {"type": ["number", "string"]},
        "text": {"type": "string"},
    },
    "required": ["start", "end", "text"],
}
"""Schema for one item of a subtitle array."""


def is_json(data: str) -> bool:
    text = data.strip()
    return (text.startswith("{") and text.endswith("}")) or (
        text.startswith("[") and text.endswith("]")
    )


def _validate(instance: Any, schema: Dict[str, Any], what: str) -> None:
    try:
        jsonschema.validate(instance=instance, schema=schema)
    except jsonschema.ValidationError as exc:
        raise FormatError("Invalid {}: {}".format(what, exc.message)) from exc


def _milliseconds_to_seconds(value: Union[int, float, str]) -> float:
    try:
        milliseconds = float(value)
    except ValueError:
        milliseconds = math.nan
    if math.isnan(milliseconds):
        raise GrammarError("Subtitle time is not a number: {!r}".format(value))
    return milliseconds / 1000


def _parse_transcript_object(
    data: Dict[str, Any], options: Optional[CombineOptions]
) -> List[Segment]:
    if not data:
        return []
    if "segments" not in data:
        raise FormatError("JSON transcript object has no segments")

    segments = data["segments"]
    _validate(segments, TRANSCRIPT_SEGMENTS_SCHEMA, "JSON transcript segments")

    combiner = SegmentCombiner(options)
    for item in segments:
        combiner.add(
            Segment(
                start_time=item["startTime"],
                end_time=item["endTime"],
                speaker=item.get("speaker"),
                body=item["body"],
            )
        )
    return combiner.segments


def _parse_subtitle_array(
    data: List[Any], options: Optional[CombineOptions]
) -> List[Segment]:
    for item in data:
        _validate(item, SUBTITLE_ITEM_SCHEMA, "JSON subtitle item")

    combiner = SegmentCombiner(options)
    last_speaker = ""
    for item in data:
        speaker, message = parse_speaker(item["text"])
        if speaker:
            last_speaker = speaker
        combiner.add(
            Segment(
                start_time=_milliseconds_to_seconds(item["start"]),
                end_time=_milliseconds_to_seconds(item["end"]),
                speaker=last_speaker,
                body=message,
            )
        )
    return combiner.segments


def parse_json(data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
    """Parse a JSON transcript object or subtitle array into segments.

    Raises:
        FormatError: If the text is not JSON, the top-level shape is not
                     supported, or the content fails schema validation.
        GrammarError: If a subtitle time is not a number.
    """
    if not is_json(data):
        raise FormatError("Data is not valid JSON format")

    try:
        parsed = json.loads(data)
    except json.JSONDecodeError as exc:
        raise FormatError("Unable to parse JSON data: {}".format(exc)) from exc

    if isinstance(parsed, dict):
        return _parse_transcript_object(parsed, options)
    if isinstance(parsed, list):
        return _parse_subtitle_array(parsed, options)

    logger.debug("Unsupported JSON top-level type %s", type(parsed).__name__)
    raise FormatError("Unknown JSON transcript format")


class JSONParser(BaseParser):
    """JSON transcript object / subtitle array parser."""

    format = TranscriptFormat.JSON

    @property
    def name(self) -> str:
        return "JSON transcript"

    def detect(self, data: str) -> bool:
        return is_json(data)

    def parse(self, data: str, options: Optional[CombineOptions] = None) -> List[Segment]:
        return parse_json(data, options)
