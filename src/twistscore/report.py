# Copyright © 2025 Ed Nutting
# SPDX-License-Identifier: MIT
# See LICENSE file for details

"""
Rendering of scored attempts for the command line.

Text output lists each target word with its verdict and then the metrics;
JSON output carries the same information for other tools to consume.
"""

import json
from typing import Any

from rapidfuzz import fuzz

from .aligner import MISSING_WORD, Correct, Incorrect, WordVerdict
from .evaluation import Evaluation

# Markers for each verdict in text output
STATUS_MARKERS: dict[str, str] = {
    "correct": "✓",
    "incorrect": "✗",
    "pending": "·",
}


def similarity(verdict: WordVerdict) -> float | None:
    """
    How close a misheard word was to the target word (0-100).

    Display only: verdicts are always exact and never depend on this value.

    Returns:
        Similarity ratio, or None for verdicts without a spoken word
    """
    if not isinstance(verdict, Incorrect) or verdict.spoken == MISSING_WORD:
        return None
    return fuzz.ratio(verdict.word, verdict.spoken)


def verdict_to_dict(verdict: WordVerdict) -> dict[str, Any]:
    """Convert a verdict to a JSON-friendly dictionary."""
    result: dict[str, Any] = {"word": verdict.word, "status": verdict.status}
    if isinstance(verdict, Incorrect):
        result["spoken"] = verdict.spoken
    return result


def evaluation_to_dict(evaluation: Evaluation) -> dict[str, Any]:
    """Convert an evaluation to a JSON-friendly dictionary."""
    return {
        "words": [verdict_to_dict(v) for v in evaluation.verdicts],
        "stats": {
            "totalSpoken": evaluation.stats.total_spoken,
            "extraWords": evaluation.stats.extra_words,
            "correctMatches": evaluation.stats.correct_matches,
        },
        "scores": evaluation.scores.as_dict(),
        "overall": evaluation.overall,
        "rating": evaluation.rating,
        "isComplete": evaluation.is_complete,
        "duration": evaluation.duration_seconds,
    }


def render_json(evaluation: Evaluation) -> str:
    """Render an evaluation as pretty-printed JSON."""
    return json.dumps(evaluation_to_dict(evaluation), indent=2, ensure_ascii=False)


def _format_word(verdict: WordVerdict, show_similarity: bool) -> str:
    line: str = f"  {STATUS_MARKERS[verdict.status]} {verdict.word}"
    if isinstance(verdict, Incorrect):
        line += f" (heard \"{verdict.spoken}\""
        ratio: float | None = similarity(verdict) if show_similarity else None
        if ratio is not None:
            line += f", {ratio:.0f}% similar"
        line += ")"
    return line


def render_text(
    evaluation: Evaluation,
    show_words: bool = True,
    show_similarity: bool = False
) -> str:
    """
    Render an evaluation as human-readable text.

    Args:
        evaluation: The scored attempt
        show_words: Include the word-by-word breakdown
        show_similarity: Annotate misheard words with a similarity percentage

    Returns:
        Multi-line report (without trailing newline)
    """
    lines: list[str] = []

    if show_words:
        lines.append("Words:")
        lines.extend(_format_word(v, show_similarity) for v in evaluation.verdicts)
        lines.append("")

    lines.append("Scores:")
    for name, value in evaluation.scores.as_dict().items():
        lines.append(f"  {name:<12} {value:3d}")

    correct: int = sum(1 for v in evaluation.verdicts if isinstance(v, Correct))
    lines.append("")
    lines.append(f"Correct words: {correct} / {len(evaluation.verdicts)}")
    lines.append(f"Extra words:   {evaluation.stats.extra_words}")
    if evaluation.duration_seconds is not None:
        lines.append(f"Duration:      {evaluation.duration_seconds:.1f}s")

    if evaluation.overall is None:
        lines.append("Overall:       -")
    else:
        lines.append(f"Overall:       {evaluation.overall}% ({evaluation.rating})")

    return "\n".join(lines)
