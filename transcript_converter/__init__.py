"""Transcript Converter: SRT, WebVTT, JSON and HTML transcripts to segments.

WHY: Podcast and caption transcripts come in several text formats that
describe the same thing: who said what, when. This package reads all of
them into one list of timed segments and can merge those segments into
readable turns.

HOW: Three-stage pipeline: sniff (formats.detect), parse (one parser per
format in formats/), combine (core.segments). convert_file() runs all three.

RULES:
- Every parser produces the same Segment IR
- Adding an input format = one new parser module plus a PARSERS entry
- Combination rules come from an explicit CombineOptions or the Options
  singleton
"""

from transcript_converter.converter import convert_file
from transcript_converter.core.errors import (
    ConfigurationError,
    FormatError,
    GrammarError,
    TranscriptError,
)
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions, Options, set_options
from transcript_converter.core.segments import combine_single_word_segments
from transcript_converter.core.timestamp import (
    format_timestamp,
    parse_timestamp,
    timestamp_formatter,
)
from transcript_converter.formats.detect import determine_format

__version__ = "0.1.0"

__all__ = [
    "CombineOptions",
    "ConfigurationError",
    "FormatError",
    "GrammarError",
    "Options",
    "Segment",
    "TranscriptError",
    "TranscriptFormat",
    "combine_single_word_segments",
    "convert_file",
    "determine_format",
    "format_timestamp",
    "parse_timestamp",
    "set_options",
    "timestamp_formatter",
]
