"""Exception taxonomy for transcript conversion.

WHY: Callers need to tell apart "this is not the format you asked for",
"this cue or timestamp is malformed" and "you configured an option with the
wrong type". The parsers recover from some of these and not others, so the
distinction has to live in the type, not in the message.

HOW: One base class and three concrete errors. Every one of them is a
TypeError, so a caller can catch any conversion failure with
``except TypeError``. FormatError and GrammarError are also ValueErrors for
handlers written against bad input values.

RULES:
- FormatError: input does not match the requested/detected format. Fatal.
- GrammarError: malformed timestamp or cue structure. Fatal for JSON arrays,
  recovered per cue (SRT/VTT) or per element (HTML) by the parsers.
- ConfigurationError: wrong value type for a recognized option. Raised at
  the setter call, never deferred to conversion time.
"""


class TranscriptError(Exception):
    """Base class for every error raised by transcript_converter."""


class FormatError(TranscriptError, TypeError, ValueError):
    """Input data does not match the requested or detected format."""


class GrammarError(TranscriptError, TypeError, ValueError):
    """A timestamp or cue does not follow the expected grammar."""


class ConfigurationError(TranscriptError, TypeError):
    """An option was given a value of the wrong type."""
