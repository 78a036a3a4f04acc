"""Conversion facade: text in, combined segments out.

WHY: Most callers just have the contents of a transcript file and want
segments. convert_file() hides format detection, the parser registry and
the options singleton behind one call.

HOW: Strips a BOM and leading whitespace, resolves the format (given or
sniffed), looks up the parser in PARSERS and runs it with either the
explicit CombineOptions or a snapshot of the Options singleton.

RULES:
- transcript_format may be a TranscriptFormat, its string value, or None
  for auto-detection
- An unknown format name raises FormatError
- The Options singleton is read once per call and never mutated here
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from transcript_converter.core.errors import FormatError
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import CombineOptions, Options
from transcript_converter.formats import PARSERS
from transcript_converter.formats.detect import determine_format

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def resolve_format(transcript_format: Union[TranscriptFormat, str]) -> TranscriptFormat:
    """Turn a format name into a TranscriptFormat.

    Raises:
        FormatError: If the name is not a supported format.
    """
    if isinstance(transcript_format, TranscriptFormat):
        return transcript_format
    try:
        return TranscriptFormat(str(transcript_format).lower())
    except ValueError:
        raise FormatError("Unknown transcript format: {}".format(transcript_format)) from None


def convert_file(
    data: str,
    transcript_format: Optional[Union[TranscriptFormat, str]] = None,
    options: Optional[CombineOptions] = None,
) -> List[Segment]:
    """Convert transcript text into segments.

    Args:
        data: The transcript file contents.
        transcript_format: Format of ``data``; detected when None.
        options: Combination rules; the current Options are used when None.

    Returns:
        Segments in source order after the combination rules ran.

    Raises:
        FormatError: If the format is unknown, cannot be detected, or the
                     data does not match it.
        GrammarError: If a JSON subtitle array carries a non-numeric time.
    """
    text = data.lstrip(_BOM).lstrip()

    if transcript_format is None:
        resolved = determine_format(text)
        logger.debug("Detected transcript format: %s", resolved.value)
    else:
        resolved = resolve_format(transcript_format)

    if options is None:
        options = Options.snapshot()

    parser = PARSERS[resolved]()
    return parser.parse(text, options)
