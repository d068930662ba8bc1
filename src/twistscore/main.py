"""
Command line interface for scoring a single attempt.

Takes a target phrase and a transcript (inline or from files), plus the
attempt duration, and prints the word verdicts and metrics.
"""

import argparse
import logging
import sys
from pathlib import Path

from . import debug_log
from .config import (
    OUTPUT_FORMATS,
    Config,
    OutputSettings,
    get_config_path,
    get_output_settings,
    load_config,
    save_config,
    update_config_output,
)
from .evaluation import Evaluation, evaluate
from .report import render_json, render_text

logger = logging.getLogger(__name__)


def _read_text(parser: argparse.ArgumentParser, path: Path) -> str:
    """Read an input file, reporting failures as usage errors."""
    try:
        with open(path, encoding='utf-8') as f:
            return f.read()
    except OSError as e:
        parser.error(f"could not read {path}: {e}")


def _resolve_inputs(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace
) -> tuple[str, str | None]:
    """Work out the phrase and transcript from positionals and input files.

    With --phrase-file, a single positional is the transcript.
    """
    positionals: list[str] = [
        p for p in (args.phrase, args.transcript) if p is not None]
    phrase: str | None = None
    transcript: str | None = None

    if args.phrase_file is not None:
        if len(positionals) > 1 or (positionals and args.transcript_file is not None):
            parser.error("too many inputs: --phrase-file takes the place of the phrase argument")
        phrase = _read_text(parser, args.phrase_file)
        if positionals:
            transcript = positionals[0]
    else:
        phrase = args.phrase
        if args.transcript is not None and args.transcript_file is not None:
            parser.error("give the transcript as an argument or --transcript-file, not both")
        transcript = args.transcript

    if args.transcript_file is not None:
        transcript = _read_text(parser, args.transcript_file)

    if not phrase:
        parser.error("a phrase is required (argument or --phrase-file)")
    return phrase, transcript


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser, using config values as defaults."""
    output: OutputSettings = get_output_settings(config)

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Score a spoken attempt at a tongue twister"
    )

    parser.add_argument(
        "phrase",
        nargs="?",
        default=None,
        help="The target phrase"
    )

    parser.add_argument(
        "transcript",
        nargs="?",
        default=None,
        help="What was heard (empty if nothing was said yet)"
    )

    parser.add_argument(
        "--phrase-file",
        type=Path,
        default=None,
        help="Read the target phrase from a file"
    )

    parser.add_argument(
        "--transcript-file",
        type=Path,
        default=None,
        help="Read the transcript from a file"
    )

    parser.add_argument(
        "-d", "--duration",
        type=float,
        default=None,
        help="Length of the attempt in seconds"
    )

    parser.add_argument(
        "--format",
        choices=OUTPUT_FORMATS,
        default=output["format"],
        help=f"Output format (default: from config or {output['format']})"
    )

    parser.add_argument(
        "--no-words",
        action="store_false",
        dest="show_words",
        default=output["show_words"],
        help="Hide the word-by-word breakdown"
    )

    parser.add_argument(
        "--similarity",
        action="store_true",
        dest="show_similarity",
        default=output["show_similarity"],
        help="Show how close each misheard word was"
    )

    parser.add_argument(
        "--save-config",
        action="store_true",
        help="Save current output options to config file and exit"
    )

    parser.add_argument(
        "--debug-log",
        action="store_true",
        help="Append scored attempts to ./logs/attempts.log"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show alignment debug messages"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Entry point for the twistscore command."""
    config: Config = load_config()
    parser: argparse.ArgumentParser = build_parser(config)
    args: argparse.Namespace = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config["log_level"].upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.save_config:
        new_config: Config = update_config_output(config, {
            "format": args.format,
            "show_words": args.show_words,
            "show_similarity": args.show_similarity,
        })
        if save_config(new_config):
            print(f"Configuration saved to {get_config_path()}")
        return

    phrase, transcript = _resolve_inputs(parser, args)

    # Enable debug logging if requested
    if args.debug_log:
        debug_log.enable()
        print("Debug logging enabled (logs will be saved to ./logs/)",
              file=sys.stderr)

    evaluation: Evaluation = evaluate(phrase, transcript, args.duration)
    debug_log.log_attempt(evaluation)

    if args.format == "json":
        print(render_json(evaluation))
    else:
        print(render_text(
            evaluation,
            show_words=args.show_words,
            show_similarity=args.show_similarity,
        ))


if __name__ == "__main__":
    main()
