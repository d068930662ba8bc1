# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Debug tool for replaying recorded attempts through the scorer.

This CLI tool takes a transcript file (one attempt per line) and a phrase
file, scores every attempt, and outputs detailed alignment information to
help debug scoring issues.

Transcript lines may end with "|<seconds>" to give the attempt's duration:

    she sells sea shells by the sea shore|3.2
"""

import argparse
import statistics
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal, TextIO

from .aligner import Correct, Incorrect
from .evaluation import Evaluation, evaluate

EventType = Literal["advance", "no_advance", "regress"]

DURATION_SEPARATOR: str = "|"


@dataclass
class AttemptRecord:
    """A single scored attempt (or attempt prefix) during replay."""
    transcript_line: int
    transcript: str
    evaluation: Evaluation
    event_type: EventType | None = None


def parse_attempt_line(line: str) -> tuple[str, float | None]:
    """Split an attempt line into transcript text and optional duration.

    A trailing "|<seconds>" is treated as the duration only if it parses
    as a number; otherwise the whole line is the transcript.
    """
    text, sep, tail = line.rpartition(DURATION_SEPARATOR)
    if not sep:
        return line.strip(), None
    try:
        return text.strip(), float(tail)
    except ValueError:
        return line.strip(), None


def load_transcript(path: Path) -> list[str]:
    """Load transcript file and extract attempt lines.

    Filters out metadata lines (starting with '===') and empty lines.
    """
    lines: list[str] = []
    with open(path, encoding='utf-8') as f:
        for line in f:
            stripped_line: str = line.strip()
            # Skip metadata lines and empty lines
            if stripped_line.startswith('===') or not stripped_line:
                continue
            lines.append(stripped_line)
    return lines


def load_phrase(path: Path) -> str:
    """Load phrase file content."""
    with open(path, encoding='utf-8') as f:
        return f.read().strip()


def _write_header(output: TextIO, title: str, phrase: str, attempts: int) -> None:
    reference: Evaluation = evaluate(phrase, "")
    output.write("=" * 80 + "\n")
    output.write(f"{title}\n")
    output.write(f"Generated: {datetime.now().isoformat()}\n")
    output.write(f"Phrase words: {len(reference.target_words)}\n")
    output.write(f"Attempts: {attempts}\n")
    output.write("=" * 80 + "\n\n")

    output.write("PHRASE WORDS:\n")
    output.write("-" * 40 + "\n")
    for i, word in enumerate(reference.target_words):
        output.write(f"  [{i:4d}] {word}\n")
    output.write("\n" + "=" * 80 + "\n\n")


def _write_verdicts(output: TextIO, evaluation: Evaluation, verbose: bool) -> None:
    for i, verdict in enumerate(evaluation.verdicts):
        if isinstance(verdict, Incorrect):
            output.write(
                f"  [{i:4d}] \"{verdict.word}\" heard \"{verdict.spoken}\" (incorrect)\n")
        elif verbose:
            output.write(f"  [{i:4d}] \"{verdict.word}\" ({verdict.status})\n")


def _write_scores(output: TextIO, evaluation: Evaluation) -> None:
    scores: str = ", ".join(
        f"{name}={value}" for name, value in evaluation.scores.as_dict().items())
    output.write(f"  scores: {scores}\n")
    output.write(
        f"  overall: {evaluation.overall} "
        f"extra words: {evaluation.stats.extra_words}\n")


def replay_attempts(
    transcript_lines: list[str],
    phrase: str,
    output: TextIO,
    verbose: bool = False
) -> list[AttemptRecord]:
    """Score each transcript line as a complete attempt and log the results.

    Args:
        transcript_lines: Attempt lines, optionally with "|<seconds>" suffix
        phrase: The target phrase
        output: File handle to write log output
        verbose: If True, log every word. If False, only log incorrect words.

    Returns:
        List of all attempt records
    """
    _write_header(output, "ATTEMPT REPLAY LOG", phrase, len(transcript_lines))
    records: list[AttemptRecord] = []

    output.write("SCORING LOG:\n")
    output.write("-" * 40 + "\n")

    for line_num, line in enumerate(transcript_lines, start=1):
        text, duration = parse_attempt_line(line)

        line_display: str = f"--- Attempt {line_num}: \"{text[:60]}"
        line_display += '...' if len(text) > 60 else ''
        line_display += "\" ---"
        output.write(f"\n{line_display}\n")

        evaluation: Evaluation = evaluate(phrase, text, duration)
        _write_verdicts(output, evaluation, verbose)
        _write_scores(output, evaluation)

        records.append(AttemptRecord(
            transcript_line=line_num,
            transcript=text,
            evaluation=evaluation,
        ))

    _write_summary(output, records)
    return records


def replay_attempts_word_by_word(
    transcript_lines: list[str],
    phrase: str,
    output: TextIO,
    verbose: bool = False
) -> list[AttemptRecord]:
    """Rescore each attempt as it grows word by word.

    This simulates a live display that rescores on every partial result.
    Prefix durations are scaled in proportion to the words heard so far.

    Args:
        transcript_lines: Attempt lines, optionally with "|<seconds>" suffix
        phrase: The target phrase
        output: File handle to write log output
        verbose: If True, log every step. If False, only log regressions.

    Returns:
        List of records, one per prefix
    """
    _write_header(output, "ATTEMPT REPLAY LOG (WORD-BY-WORD MODE)",
                  phrase, len(transcript_lines))
    # Final state of each attempt, for the summary
    finals: list[AttemptRecord] = []
    records: list[AttemptRecord] = []

    output.write("SCORING LOG:\n")
    output.write("-" * 40 + "\n")

    for line_num, line in enumerate(transcript_lines, start=1):
        text, duration = parse_attempt_line(line)
        words: list[str] = text.split()
        if not words:
            continue

        output.write(f"\n--- Attempt {line_num} ---\n")
        correct_before: int = 0

        for word_idx, word in enumerate(words):
            partial: str = " ".join(words[:word_idx + 1])
            partial_duration: float | None = (
                duration * (word_idx + 1) / len(words)
                if duration is not None else None
            )
            evaluation: Evaluation = evaluate(phrase, partial, partial_duration)
            correct_after: int = sum(
                1 for v in evaluation.verdicts if isinstance(v, Correct))

            # A later word can re-align earlier ones, so the count may drop
            event_type: EventType
            if correct_after > correct_before:
                event_type = "advance"
            elif correct_after == correct_before:
                event_type = "no_advance"
            else:
                event_type = "regress"

            if event_type == "regress":
                output.write(
                    f"  *** REGRESS at \"{word}\": correct {correct_before} -> "
                    f"{correct_after} ***\n")
            elif verbose:
                output.write(
                    f"    \"{word}\" correct={correct_after} "
                    f"overall={evaluation.overall} ({event_type})\n")

            records.append(AttemptRecord(
                transcript_line=line_num,
                transcript=partial,
                evaluation=evaluation,
                event_type=event_type,
            ))
            correct_before = correct_after

        finals.append(records[-1])
        _write_scores(output, records[-1].evaluation)

    _write_summary(output, finals)
    return records


def _write_summary(output: TextIO, records: list[AttemptRecord]) -> None:
    """Write the summary for the final state of each attempt."""
    output.write("\n" + "=" * 80 + "\n")
    output.write("SUMMARY:\n")
    output.write("-" * 40 + "\n")

    overalls: list[int] = [
        r.evaluation.overall for r in records if r.evaluation.overall is not None]
    complete: list[AttemptRecord] = [
        r for r in records if r.evaluation.is_complete]

    output.write(f"Total attempts scored: {len(records)}\n")
    output.write(f"Complete attempts: {len(complete)}\n")
    if overalls:
        output.write(f"Best overall: {max(overalls)}\n")
        output.write(f"Mean overall: {statistics.mean(overalls):.1f}\n")
    else:
        output.write("Best overall: -\n")


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the replay tool."""
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="Debug scoring by replaying recorded attempts against a phrase"
    )

    parser.add_argument(
        "transcript",
        type=Path,
        help="Path to transcript file (one attempt per line)"
    )

    parser.add_argument(
        "phrase",
        type=Path,
        help="Path to phrase file"
    )

    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output log file path (default: stdout)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every word, not just incorrect words"
    )

    parser.add_argument(
        "-w", "--word-by-word",
        action="store_true",
        help="Rescore each attempt word-by-word (simulates partial results)"
    )

    args: argparse.Namespace = parser.parse_args(argv)

    # Validate inputs
    if not args.transcript.exists():
        print(
            f"Error: Transcript file not found: {args.transcript}", file=sys.stderr)
        sys.exit(1)

    if not args.phrase.exists():
        print(f"Error: Phrase file not found: {args.phrase}", file=sys.stderr)
        sys.exit(1)

    # Load files
    try:
        transcript_lines: list[str] = load_transcript(args.transcript)
        phrase: str = load_phrase(args.phrase)
    except OSError as e:
        print(f"Error loading files: {e}", file=sys.stderr)
        sys.exit(1)

    if not transcript_lines:
        print("Error: No transcript lines found", file=sys.stderr)
        sys.exit(1)

    replay = replay_attempts_word_by_word if args.word_by_word else replay_attempts

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            replay(transcript_lines, phrase, f, args.verbose)
        print(f"Replay log written to: {args.output}")
    else:
        replay(transcript_lines, phrase, sys.stdout, args.verbose)


if __name__ == "__main__":
    main()
