"""Command-line interface for the Transcript Converter.

WHY: Users need a simple way to turn a transcript file into segments from
the terminal, for inspection or for feeding other tools. The CLI wires
together file validation, option loading, conversion and output saving
behind a single command.

HOW: Uses argparse to accept an input file, an optional format override,
the combination flags and an output location. Options from the
environment (.env) are applied first, then the flags on top. The segment
list is written as JSON next to the source (or to --output-dir, or
stdout). Status messages go to stderr.

RULES:
- Positional argument: input transcript file path
- Format: --format, else the file extension, else sniffed from content
- Flags only switch rules on; they never switch off an env-enabled rule
- Output naming: {stem}-segments.json, numeric suffix for conflicts
  (-segments-2.json)
- TranscriptError and OSError exit with status 1 and "Error: ..." on stderr
- Python 3.9 compatible: no match/case, no X | Y unions
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from transcript_converter.config import (
    DEFAULT_COMBINE_SEGMENTS_LENGTH,
    LOG_LEVEL,
    SUPPORTED_EXTENSIONS,
    load_env_options,
)
from transcript_converter.converter import convert_file
from transcript_converter.core.errors import TranscriptError
from transcript_converter.core.ir import Segment, TranscriptFormat
from transcript_converter.core.options import Options
from transcript_converter.core.segments import combine_single_word_segments

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "-segments.json"


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so --stdout can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _resolve_output_path(
    stem: str,
    suffix: str,
    output_dir: Path,
) -> Path:
    """Resolve the output file path, adding a numeric suffix on conflict.

    RULES:
    - First attempt: {stem}{suffix} (e.g. episode-segments.json)
    - Conflict: insert a counter before the extension, starting at 2
      (e.g. episode-segments-2.json)

    Returns:
        A Path that does not yet exist.
    """
    base_path = output_dir / "{}{}".format(stem, suffix)
    if not base_path.exists():
        return base_path

    # "-segments.json" → ("-segments", ".json")
    dot_idx = suffix.rfind(".")
    if dot_idx > 0:
        suffix_name = suffix[:dot_idx]
        suffix_ext = suffix[dot_idx:]
    else:
        suffix_name = suffix
        suffix_ext = ""

    counter = 2
    while True:
        candidate = output_dir / "{}{}-{}{}".format(stem, suffix_name, counter, suffix_ext)
        if not candidate.exists():
            return candidate
        counter += 1


def _apply_options(args: argparse.Namespace) -> None:
    """Load environment options, then layer the command-line flags on top.

    Raises:
        ConfigurationError: If an environment value has the wrong type.
    """
    Options.set_options(load_env_options())

    if args.combine_speaker:
        Options.set_option_by_name("combine_speaker", True)
    if args.combine_segments:
        Options.set_option_by_name("combine_segments", True)
    if args.combine_segments_length is not None:
        Options.set_option_by_name("combine_segments_length", args.combine_segments_length)
    if args.combine_equal_times:
        Options.set_option_by_name("combine_equal_times", True)
    if args.combine_equal_times_separator is not None:
        Options.set_option_by_name(
            "combine_equal_times_separator", args.combine_equal_times_separator
        )
    if args.speaker_change:
        Options.set_option_by_name("speaker_change", True)

    logger.debug("Combination options: %s", Options.as_dict())


def _select_format(args: argparse.Namespace, input_path: Path) -> Optional[TranscriptFormat]:
    if args.format:
        return TranscriptFormat(args.format)
    return SUPPORTED_EXTENSIONS.get(input_path.suffix.lower())


def _render(segments: List[Segment]) -> str:
    return json.dumps(
        {"segments": [segment.to_dict() for segment in segments]},
        indent=4,
        ensure_ascii=False,
    )


def _run(args: argparse.Namespace) -> None:
    """Convert one file and save or print the result."""
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        print("Error: File not found: {}".format(input_path), file=sys.stderr)
        sys.exit(1)

    output_dir = Path(args.output_dir).resolve() if args.output_dir else input_path.parent
    if not args.stdout and not output_dir.is_dir():
        print("Error: Output directory does not exist: {}".format(output_dir), file=sys.stderr)
        sys.exit(1)

    try:
        _apply_options(args)
        transcript_format = _select_format(args, input_path)

        _status("Reading {}...".format(input_path.name))
        data = input_path.read_text(encoding="utf-8")

        segments = convert_file(data, transcript_format, Options.snapshot())
        _status("  {} segments".format(len(segments)))

        if args.single_words:
            segments = combine_single_word_segments(segments, args.single_words_length)
            _status("  {} segments after combining single words".format(len(segments)))

        content = _render(segments)
        if args.stdout:
            print(content)
            return

        path = _resolve_output_path(input_path.stem, OUTPUT_SUFFIX, output_dir)
        path.write_text(content, encoding="utf-8")
        _status("Saved: {}".format(path))

    except (TranscriptError, OSError) as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable; tests can inspect the parser without converting anything.
    """
    parser = argparse.ArgumentParser(
        prog="transcript_converter",
        description="Convert SRT, WebVTT, JSON and HTML transcripts into a "
                    "JSON list of timed speaker segments.",
    )

    parser.add_argument(
        "input_file",
        help="Path to the transcript file to convert.",
    )

    parser.add_argument(
        "--format",
        choices=[f.value for f in TranscriptFormat],
        default=None,
        help="Input format. Default: from the file extension, else detected.",
    )

    parser.add_argument(
        "--output-dir",
        default=None,
        help="Directory to save the output file (default: same as input file).",
    )

    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the segments JSON to stdout instead of saving a file.",
    )

    combine = parser.add_argument_group("combination rules")
    combine.add_argument(
        "--combine-speaker",
        action="store_true",
        help="Merge consecutive segments from the same speaker.",
    )
    combine.add_argument(
        "--combine-segments",
        action="store_true",
        help="Merge same-speaker segments up to --combine-segments-length characters.",
    )
    combine.add_argument(
        "--combine-segments-length",
        type=int,
        default=None,
        help="Max body length for --combine-segments (default: {}).".format(
            DEFAULT_COMBINE_SEGMENTS_LENGTH
        ),
    )
    combine.add_argument(
        "--combine-equal-times",
        action="store_true",
        help="Merge segments with identical start and end times.",
    )
    combine.add_argument(
        "--combine-equal-times-separator",
        default=None,
        help="Body separator for --combine-equal-times (default: newline).",
    )
    combine.add_argument(
        "--speaker-change",
        action="store_true",
        help="Only keep the speaker name when it changes.",
    )

    words = parser.add_argument_group("word-level transcripts")
    words.add_argument(
        "--single-words",
        action="store_true",
        help="Group one-word segments into phrases after conversion.",
    )
    words.add_argument(
        "--single-words-length",
        type=int,
        default=DEFAULT_COMBINE_SEGMENTS_LENGTH,
        help="Max phrase length for --single-words (default: %(default)s).",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(levelname)s %(name)s: %(message)s",
    )
    _run(args)


if __name__ == "__main__":
    main()
