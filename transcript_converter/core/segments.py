"""Segment combination engine.

WHY: Raw cues are often too fine-grained: caption files split one speaker
turn into many short cues, and word-level transcripts carry one word per
segment. The engine folds each new segment into the running list under a
small set of ordered merge rules.

HOW: SegmentCombiner keeps the output list plus the last speaker name that
was actually shown. For every added segment it tries, in order, the
combine-speaker, combine-segments and combine-equal-times rules against
the previous segment; the first one that fires replaces the previous
segment with the merged one. The speaker-change rule runs last and blanks
repeated speaker names on appended segments.

RULES:
- With no option enabled, segments are appended unchanged
- Only adjacent segments merge; order is never changed
- A merged segment keeps the prior start and speaker and takes the new end
- Bodies join with the rule's separator unless the prior body is empty or
  the addition starts with closing punctuation
- The last speaker is only tracked while speaker_change is on
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import Iterable, List, Optional

from transcript_converter.config import (
    DEFAULT_COMBINE_SEGMENTS_LENGTH,
    DEFAULT_EQUAL_TIMES_SEPARATOR,
    SINGLE_WORD_SAMPLE_SIZE,
)
from transcript_converter.core.errors import FormatError
from transcript_converter.core.ir import Segment
from transcript_converter.core.options import CombineOptions

# Additions starting with these attach without a separator ("word" + ".")
_PUNCTUATION_RE = re.compile(r"^ *[.,?!)\]}>]")

_WHITESPACE_RE = re.compile(r"\s")


def join_body(body: str, addition: str, separator: str = DEFAULT_EQUAL_TIMES_SEPARATOR) -> str:
    """Append ``addition`` to ``body`` using ``separator``.

    An empty ``body`` returns ``addition`` unchanged. Punctuation-led
    additions are attached directly.
    """
    if not body:
        return addition
    if _PUNCTUATION_RE.match(addition):
        return body + addition
    return body + (separator or DEFAULT_EQUAL_TIMES_SEPARATOR) + addition


def join_segments(prior: Segment, addition: Segment, separator: str) -> Segment:
    """Merge two adjacent segments into a new one."""
    return Segment(
        start_time=prior.start_time,
        end_time=addition.end_time,
        speaker=prior.speaker,
        body=join_body(prior.body, addition.body, separator),
    )


def find_last_speaker(segments: List[Segment]) -> Optional[str]:
    """Most recent speaker in ``segments`` that was not blanked."""
    for segment in reversed(segments):
        if segment.speaker is not None:
            return segment.speaker
    return None


class SegmentCombiner:
    """Stateful fold of segments under a CombineOptions value.

    Usage::

        combiner = SegmentCombiner(options)
        for segment in raw_segments:
            combiner.add(segment)
        result = combiner.segments

    Attributes:
        options: The merge rules in effect.
        segments: Output list, appended to or updated in place.
        last_speaker: Last speaker name kept on an output segment. None
                      until one is seen, and always None unless
                      ``options.speaker_change`` is on.
    """

    def __init__(
        self,
        options: Optional[CombineOptions] = None,
        segments: Optional[List[Segment]] = None,
    ) -> None:
        self.options = options if options is not None else CombineOptions()
        self.segments: List[Segment] = segments if segments is not None else []
        self.last_speaker: Optional[str] = None
        if self.options.speaker_change:
            self.last_speaker = find_last_speaker(self.segments)

    def add(self, segment: Segment) -> List[Segment]:
        """Fold one segment into the output list and return the list."""
        if not self.options.any_set():
            self.segments.append(segment)
            return self.segments

        if not self.segments:
            self._append(self._first_speaker_change(segment))
            return self.segments

        prior = self.segments[-1]
        merged = self._merge(prior, segment)
        if merged is not None:
            self.segments[-1] = merged
        else:
            self._append(self._speaker_change(prior, segment))
        return self.segments

    def _same_speaker(self, prior: Segment, segment: Segment) -> bool:
        if segment.speaker == prior.speaker:
            return True
        return self.last_speaker is not None and segment.speaker == self.last_speaker

    def _merge(self, prior: Segment, segment: Segment) -> Optional[Segment]:
        options = self.options

        if options.combine_speaker and self._same_speaker(prior, segment):
            return join_segments(prior, segment, " ")

        if options.combine_segments and self._same_speaker(prior, segment):
            max_length = options.combine_segments_length or DEFAULT_COMBINE_SEGMENTS_LENGTH
            if len(join_body(prior.body, segment.body, " ")) <= max_length:
                return join_segments(prior, segment, " ")

        if (
            options.combine_equal_times
            and segment.start_time == prior.start_time
            and segment.end_time == prior.end_time
            and self._same_speaker(prior, segment)
        ):
            separator = options.combine_equal_times_separator or DEFAULT_EQUAL_TIMES_SEPARATOR
            return join_segments(prior, segment, separator)

        return None

    def _first_speaker_change(self, segment: Segment) -> Segment:
        if (
            self.options.speaker_change
            and self.last_speaker is not None
            and segment.speaker == self.last_speaker
        ):
            return replace(segment, speaker=None)
        return segment

    def _speaker_change(self, prior: Segment, segment: Segment) -> Segment:
        if not self.options.speaker_change or segment.speaker is None:
            return segment
        if (
            segment.speaker == ""
            or segment.speaker == prior.speaker
            or (self.last_speaker is not None and segment.speaker == self.last_speaker)
        ):
            return replace(segment, speaker=None)
        return segment

    def _append(self, segment: Segment) -> None:
        self.segments.append(segment)
        if self.options.speaker_change and segment.speaker is not None:
            self.last_speaker = segment.speaker


def add_segment(
    new_segment: Segment,
    prior_segments: Optional[List[Segment]],
    options: Optional[CombineOptions] = None,
) -> List[Segment]:
    """Add one segment to ``prior_segments`` applying the merge rules.

    The list is updated in place (a new list is created when None) and
    returned.
    """
    combiner = SegmentCombiner(options, prior_segments if prior_segments is not None else [])
    return combiner.add(new_segment)


def combine_single_word_segments(
    segments: Iterable[Segment],
    max_length: int = DEFAULT_COMBINE_SEGMENTS_LENGTH,
) -> List[Segment]:
    """Group one-word segments into phrases.

    WHY: Word-level transcripts (one segment per spoken word) are unreadable
    as captions. Consecutive words from the same speaker are packed into
    phrases no longer than ``max_length`` characters.

    RULES:
    - Input must really be single words: the first 20 segments are checked
      and any interior whitespace raises FormatError
    - A speaker change always starts a new phrase
    - Returns new Segment objects; the input is left untouched

    Args:
        segments: Word-level segments in source order.
        max_length: Max body length of a combined phrase.

    Raises:
        FormatError: If the sampled segments are not single words.
    """
    words = list(segments)

    for segment in words[:SINGLE_WORD_SAMPLE_SIZE]:
        if _WHITESPACE_RE.search(segment.body.strip()):
            raise FormatError(
                "Segment body is not a single word: {!r}".format(segment.body)
            )

    combined: List[Segment] = []
    current: Optional[Segment] = None
    for segment in words:
        if current is None:
            current = replace(segment)
        elif (
            segment.speaker == current.speaker
            and len(join_body(current.body, segment.body, " ")) <= max_length
        ):
            current = join_segments(current, segment, " ")
        else:
            combined.append(current)
            current = replace(segment)

    if current is not None:
        combined.append(current)
    return combined
