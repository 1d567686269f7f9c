"""Command-line interface for the subtitle chunking engine.

WHY: Tuning presets and thresholds is easier with a way to run a saved
transcript through the engine and look at the result, without spinning up
the job pipeline. The CLI wires the JSON input, build_captions() and the
JSON/SRT writers together behind one command.

HOW: argparse accepts an input transcript path ("-" for stdin), a mode, an
output format, decoration flags and an optional output path. Content goes
to stdout unless -o is given; status and errors go to stderr.

RULES:
- python -m subtitle_engine transcript.json
- python -m subtitle_engine transcript.json -o captions.srt --format srt
- cat transcript.json | python -m subtitle_engine - --mode CINEMATIC_CLIP
- Exit codes: 0 = success, 1 = input or validation error, 2 = usage error.
- Logging is configured here only; library modules just create loggers.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

import jsonschema

from subtitle_engine import build_captions
from subtitle_engine.config import DEFAULT_MODE, LOG_LEVEL
from subtitle_engine.decorate import KeywordEmojiDecorator, NullDecorator
from subtitle_engine.formats import chunks_to_dict, generate_srt, load_transcript_json
from subtitle_engine.models import FeatureFlags, SubtitleMode


def _status(msg: str) -> None:
    """Print a status message to stderr so stdout stays pipeable."""
    print(msg, file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    Kept separate from main() so tests can inspect defaults and choices.
    """
    parser = argparse.ArgumentParser(
        prog="subtitle_engine",
        description="Split a word-level transcript into timed caption chunks.",
    )

    parser.add_argument(
        "input_file",
        help="Path to a transcript JSON file, or '-' to read stdin.",
    )

    parser.add_argument(
        "-o", "--output",
        default=None,
        help="Write the result to this file instead of stdout.",
    )

    parser.add_argument(
        "--mode",
        default=DEFAULT_MODE,
        type=str.upper,
        choices=[m.value for m in SubtitleMode],
        help="Caption mode (default: %(default)s).",
    )

    parser.add_argument(
        "--format",
        dest="output_format",
        default="json",
        choices=["json", "srt"],
        help="Output format (default: %(default)s).",
    )

    parser.add_argument(
        "--highlight-keywords",
        action="store_true",
        help="Add keyword highlight decoration tokens.",
    )

    parser.add_argument(
        "--emoji",
        action="store_true",
        help="Add emoji decoration tokens.",
    )

    parser.add_argument(
        "--no-validate",
        dest="validate",
        action="store_false",
        help="Skip transcript timestamp validation.",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for ``python -m subtitle_engine``.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        transcript = load_transcript_json(_read_input(args.input_file))
    except OSError as e:
        _status("Error: Could not read {}: {}".format(args.input_file, e))
        sys.exit(1)
    except ValueError as e:
        _status("Error: {}".format(e))
        sys.exit(1)
    except jsonschema.ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        _status("Error: Invalid transcript at {}: {}".format(location, e.message))
        sys.exit(1)

    flags = FeatureFlags(
        highlight_keywords=args.highlight_keywords,
        emoji_augment=args.emoji,
    )
    decorator = KeywordEmojiDecorator() if (args.highlight_keywords or args.emoji) else NullDecorator()

    try:
        result = build_captions(
            transcript,
            args.mode,
            flags=flags,
            decorator=decorator,
            validate=args.validate,
        )
    except ValueError as e:
        _status("Error: {}".format(e))
        sys.exit(1)

    if args.output_format == "srt":
        content = generate_srt(result.chunks)
    else:
        content = json.dumps(
            chunks_to_dict(result.chunks, result.decorations, result.preset),
            indent=2,
            ensure_ascii=False,
        )

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(content)
        _status("Wrote {} chunks ({}, {}) to {}".format(
            len(result.chunks), result.preset.mode.value, args.output_format, args.output
        ))
    else:
        print(content)


if __name__ == "__main__":
    main()
