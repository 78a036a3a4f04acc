"""Intermediate representation dataclasses for parsed transcripts.

WHY: SRT, WebVTT, JSON and HTML transcripts all describe the same thing:
timed speech attributed to a speaker, spelled differently. The IR
gives every parser one target shape and gives the combination engine one
input shape, so merge rules never care where a segment came from.

HOW: Three types:
  TranscriptFormat: the four supported input formats
  Segment: one timed speech unit (the canonical output)
  SRTSegment: one raw SRT/VTT cue, before speaker carry-forward

RULES:
- All times are float seconds
- speaker == "" means "unknown speaker"
- speaker is None means "blanked by the speaker-change rule" (same speaker
  as the segment before it)
- body is never None (may be "")
- end_time may be 0 or less than start_time for a trailing segment whose
  end is unknown; nothing backfills it
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Dict, Optional

from transcript_converter.core.timestamp import timestamp_formatter


class TranscriptFormat(str, enum.Enum):
    """Supported transcript input formats.

    The values double as the CLI ``--format`` choices and the keys accepted
    by ``convert_file(transcript_format=...)``.
    """

    HTML = "html"
    JSON = "json"
    SRT = "srt"
    VTT = "vtt"


@dataclass
class Segment:
    """One timed speech segment with optional speaker attribution.

    WHY: Every parser produces these and the combination engine merges
    them. Output consumers (CLI JSON dump, caller code) only ever see this.

    RULES:
    - start_time / end_time: float seconds
    - speaker: name, "" (unknown) or None (blanked by speaker change)
    - body: cue text, lines joined with "\\n"
    - *_formatted properties go through the process-wide timestamp
      formatter, so a registered custom formatter applies on access
    """

    start_time: float
    end_time: float
    speaker: Optional[str]
    body: str

    @property
    def start_time_formatted(self) -> str:
        return timestamp_formatter.format(self.start_time)

    @property
    def end_time_formatted(self) -> str:
        return timestamp_formatter.format(self.end_time)

    def to_dict(self) -> Dict[str, Any]:
        """Render the camelCase wire shape used by the JSON transcript format.

        ``speaker`` is left out when it has been blanked (None), so a
        speaker-change transcript reads back the same way it was written.
        """
        data: Dict[str, Any] = {
            "startTime": self.start_time,
            "startTimeFormatted": self.start_time_formatted,
            "endTime": self.end_time,
            "endTimeFormatted": self.end_time_formatted,
        }
        if self.speaker is not None:
            data["speaker"] = self.speaker
        data["body"] = self.body
        return data


@dataclass
class SRTSegment:
    """A single SRT/VTT cue as read from the cue lines.

    RULES:
    - index: cue number, -1 when the cue has none (VTT, index optional)
    - speaker: "" when the first body line carries no speaker prefix
    """

    index: int
    start_time: float
    end_time: float
    speaker: str
    body: str
