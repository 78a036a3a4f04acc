"""Segment combination options and the process-wide options singleton.

WHY: The combination engine is driven entirely by six settings. Parsers
and the engine take them as an explicit CombineOptions value so they can
be called safely from anywhere; the convenience API keeps a configure-once
singleton so a caller can set rules once and convert many files.

HOW: CombineOptions is a plain dataclass. OptionsManager is a singleton
(constructing it again returns the same instance) that holds one
CombineOptions, validates value types on every set, and hands out
independent snapshots for a conversion to use.

RULES:
- set_options() resets to defaults first unless set_default=False
- Names are accepted in snake_case or the camelCase wire spelling
- Unknown names are ignored; a wrong type for a known name raises
  ConfigurationError immediately
- Flags must be bool, the separator str, the length a whole number
  (bool rejected, 40.0 stored as 40)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple

from transcript_converter.config import (
    DEFAULT_COMBINE_SEGMENTS_LENGTH,
    DEFAULT_EQUAL_TIMES_SEPARATOR,
)
from transcript_converter.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class CombineOptions:
    """Settings for the segment combination engine.

    Attributes:
        combine_equal_times: Merge with the prior segment when start time,
            end time and speaker all match.
        combine_equal_times_separator: Body separator for combine_equal_times.
        combine_segments: Merge same-speaker segments while the joined body
            fits in combine_segments_length.
        combine_segments_length: Max joined body length for combine_segments.
        combine_speaker: Merge consecutive segments from the same speaker.
            Without speaker information the whole transcript becomes one
            segment.
        speaker_change: Only keep the speaker name when it changes.
    """

    combine_equal_times: bool = False
    combine_equal_times_separator: str = DEFAULT_EQUAL_TIMES_SEPARATOR
    combine_segments: bool = False
    combine_segments_length: int = DEFAULT_COMBINE_SEGMENTS_LENGTH
    combine_speaker: bool = False
    speaker_change: bool = False

    def any_set(self) -> bool:
        """True when at least one combination rule is enabled."""
        return (
            self.combine_equal_times
            or self.combine_segments
            or self.combine_speaker
            or self.speaker_change
        )


# snake_case option name → accepted value type(s)
_OPTION_TYPES: Dict[str, Tuple[type, ...]] = {
    "combine_equal_times": (bool,),
    "combine_equal_times_separator": (str,),
    "combine_segments": (bool,),
    "combine_segments_length": (int, float),
    "combine_speaker": (bool,),
    "speaker_change": (bool,),
}

# camelCase spelling used by JSON configuration objects
_OPTION_ALIASES: Dict[str, str] = {
    "combineEqualTimes": "combine_equal_times",
    "combineEqualTimesSeparator": "combine_equal_times_separator",
    "combineSegments": "combine_segments",
    "combineSegmentsLength": "combine_segments_length",
    "combineSpeaker": "combine_speaker",
    "speakerChange": "speaker_change",
}


def _canonical_name(name: str) -> Optional[str]:
    if name in _OPTION_TYPES:
        return name
    return _OPTION_ALIASES.get(name)


def _verify_type(name: str, value: Any) -> Any:
    """Return ``value`` if it fits option ``name``, else raise ConfigurationError.

    A whole-number float length (40.0, as JSON configs often carry) comes
    back as an int.
    """
    expected = _OPTION_TYPES[name]
    # bool is an int subclass; a length of True is a mistake, not 1
    if isinstance(value, bool) and bool not in expected:
        valid = False
    elif isinstance(value, float):
        valid = float in expected and value.is_integer()
        if valid:
            value = int(value)
    else:
        valid = isinstance(value, expected)
    if not valid:
        raise ConfigurationError(
            "Invalid type {} for {}. Expected {}".format(
                type(value).__name__, name, expected[0].__name__
            )
        )
    return value


class OptionsManager:
    """Process-wide holder of the current CombineOptions.

    WHY: Lets callers configure the combination rules once and have every
    following convert_file() call honour them.

    RULES:
    - Exactly one instance per process: OptionsManager() is Options
    - Shared global state: callers must not change options while another
      thread is converting; pass CombineOptions explicitly instead
    """

    _instance: Optional["OptionsManager"] = None

    def __new__(cls) -> "OptionsManager":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._options = CombineOptions()
            cls._instance = instance
        return cls._instance

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not found normally: expose option values
        options = self.__dict__.get("_options")
        if options is not None and name in _OPTION_TYPES:
            return getattr(options, name)
        raise AttributeError(name)

    def get_option_by_name(self, name: str) -> Any:
        """Return the value of an option, or None for an unknown name."""
        canonical = _canonical_name(name)
        if canonical is None:
            return None
        return getattr(self._options, canonical)

    def set_option_by_name(self, name: str, value: Any) -> None:
        """Set one option, validating its type. Unknown names are ignored."""
        canonical = _canonical_name(name)
        if canonical is None:
            logger.debug("Ignoring unknown option %r", name)
            return
        value = _verify_type(canonical, value)
        setattr(self._options, canonical, value)

    def restore_default_settings(self) -> None:
        self._options = CombineOptions()

    def set_options(
        self,
        options: Optional[Mapping[str, Any]] = None,
        set_default: bool = True,
    ) -> None:
        """Set one or more options.

        Args:
            options: Mapping of option name to value. None sets nothing.
            set_default: Reset every option to its default before applying
                         ``options``.

        Raises:
            ConfigurationError: If a known option gets a value of the
                                wrong type.
        """
        if set_default:
            self.restore_default_settings()
        if options is None:
            return
        for name, value in options.items():
            self.set_option_by_name(name, value)

    def options_set(self) -> bool:
        return self._options.any_set()

    def snapshot(self) -> CombineOptions:
        """Independent copy of the current options for one conversion."""
        return replace(self._options)

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self._options, f.name) for f in fields(CombineOptions)}


Options = OptionsManager()


def set_options(options: Optional[Mapping[str, Any]] = None, set_default: bool = True) -> None:
    """Module-level shortcut for ``Options.set_options``."""
    Options.set_options(options, set_default)
