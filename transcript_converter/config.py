"""Configuration constants, supported extensions, and .env loading.

WHY: Centralizes the values that shape conversion (default merge length,
probe sizes, file extensions) so they are easy to find and override. The
CLI also lets a deployment preset the combination rules through the
environment instead of repeating flags on every invocation.

HOW: python-dotenv loads the .env file on import. Constants are plain
module-level values. load_env_options() turns the TRANSCRIPT_* variables
into an options dict that Options.set_options() understands.

RULES:
- Only variables that are actually set end up in load_env_options()
- Booleans are "true"/"false" (case-insensitive), anything else is false
- A non-integer TRANSCRIPT_COMBINE_SEGMENTS_LENGTH is a ConfigurationError
"""

from __future__ import annotations

import os
from typing import Any, Dict

from dotenv import load_dotenv

from transcript_converter.core.errors import ConfigurationError
from transcript_converter.core.ir import TranscriptFormat

# Load .env from the project root (where the script is run from)
load_dotenv()

# ---------------------------------------------------------------------------
# Combination defaults
# ---------------------------------------------------------------------------

DEFAULT_COMBINE_SEGMENTS_LENGTH = 32
"""Max combined body length for the combine-segments rule."""

DEFAULT_EQUAL_TIMES_SEPARATOR = "\n"
"""Body separator for the combine-equal-times rule."""

# ---------------------------------------------------------------------------
# Parsing limits
# ---------------------------------------------------------------------------

SRT_PROBE_LINE_COUNT = 20
"""Lines inspected when deciding whether data is SRT."""

SINGLE_WORD_SAMPLE_SIZE = 20
"""Segments checked for interior whitespace by combine_single_word_segments."""

# ---------------------------------------------------------------------------
# File extensions understood by the CLI
# ---------------------------------------------------------------------------

SUPPORTED_EXTENSIONS: Dict[str, TranscriptFormat] = {
    ".srt": TranscriptFormat.SRT,
    ".vtt": TranscriptFormat.VTT,
    ".json": TranscriptFormat.JSON,
    ".html": TranscriptFormat.HTML,
    ".htm": TranscriptFormat.HTML,
}

LOG_LEVEL = os.getenv("TRANSCRIPT_LOG_LEVEL", "WARNING").upper()

# ---------------------------------------------------------------------------
# Environment-provided option defaults
# ---------------------------------------------------------------------------

_ENV_BOOL_OPTIONS = {
    "TRANSCRIPT_COMBINE_EQUAL_TIMES": "combine_equal_times",
    "TRANSCRIPT_COMBINE_SEGMENTS": "combine_segments",
    "TRANSCRIPT_COMBINE_SPEAKER": "combine_speaker",
    "TRANSCRIPT_SPEAKER_CHANGE": "speaker_change",
}


def load_env_options() -> Dict[str, Any]:
    """Read combination options from TRANSCRIPT_* environment variables.

    Returns:
        Dict of snake_case option names to values, containing only the
        variables present in the environment.

    Raises:
        ConfigurationError: If TRANSCRIPT_COMBINE_SEGMENTS_LENGTH is not
                            an integer.
    """
    options: Dict[str, Any] = {}

    for env_name, option_name in _ENV_BOOL_OPTIONS.items():
        raw = os.getenv(env_name)
        if raw is not None:
            options[option_name] = raw.strip().lower() == "true"

    separator = os.getenv("TRANSCRIPT_COMBINE_EQUAL_TIMES_SEPARATOR")
    if separator is not None:
        # .env files cannot hold a literal newline without quoting
        options["combine_equal_times_separator"] = separator.replace("\\n", "\n")

    length = os.getenv("TRANSCRIPT_COMBINE_SEGMENTS_LENGTH")
    if length is not None:
        try:
            options["combine_segments_length"] = int(length.strip())
        except ValueError:
            raise ConfigurationError(
                "TRANSCRIPT_COMBINE_SEGMENTS_LENGTH must be an integer, got {!r}".format(length)
            ) from None

    return options
