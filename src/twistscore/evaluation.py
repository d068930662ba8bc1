"""
End-to-end scoring of one attempt: normalize, align, score.

Also provides a memoized alignment for callers that rescore the same
phrase/transcript pair repeatedly (e.g. a live display refreshing on every
partial result). The core aligner itself keeps no state between calls.
"""

import functools
import logging
from dataclasses import dataclass

from .aligner import AlignmentResult, AlignmentStats, Pending, WordVerdict, align
from .normalizer import normalize_text
from .scorer import ScoreSet, overall_score, score

logger = logging.getLogger(__name__)

ALIGNMENT_CACHE_SIZE: int = 256

# Overall score thresholds for the headline message, highest first
RATINGS: tuple[tuple[int, str], ...] = (
    (90, "Excellent!"),
    (70, "Good job!"),
    (50, "Keep practicing"),
)
LOWEST_RATING: str = "Try again"


@dataclass(frozen=True)
class Evaluation:
    """Everything known about one scored attempt."""
    target_words: tuple[str, ...]
    spoken_words: tuple[str, ...]
    verdicts: tuple[WordVerdict, ...]
    stats: AlignmentStats
    scores: ScoreSet
    overall: int | None
    duration_seconds: float | None = None

    @property
    def is_complete(self) -> bool:
        """True once every target word has been attempted."""
        return bool(self.verdicts) and not any(
            isinstance(v, Pending) for v in self.verdicts)

    @property
    def rating(self) -> str | None:
        """Headline message for the overall score."""
        return rating(self.overall)


@functools.lru_cache(maxsize=ALIGNMENT_CACHE_SIZE)
def cached_alignment(target: tuple[str, ...], spoken: tuple[str, ...]) -> AlignmentResult:
    """Memoized align() keyed on token tuples."""
    return align(target, spoken)


def clear_cache() -> None:
    """Drop all memoized alignments."""
    cached_alignment.cache_clear()


def rating(overall: int | None) -> str | None:
    """Map an overall score to a short message, or None if there is no score."""
    if overall is None:
        return None
    for threshold, message in RATINGS:
        if overall >= threshold:
            return message
    return LOWEST_RATING


def evaluate(
    target_text: str | None,
    spoken_text: str | None,
    duration_seconds: float | None = None,
    use_cache: bool = True
) -> Evaluation:
    """
    Score a spoken attempt at a target phrase.

    Args:
        target_text: The phrase the speaker was asked to say
        spoken_text: The finalized transcript of what was heard
        duration_seconds: How long the attempt took, if known
        use_cache: Reuse a previous alignment of the same token sequences

    Returns:
        Evaluation with verdicts, statistics, metrics and overall score
    """
    target: tuple[str, ...] = tuple(normalize_text(target_text))
    spoken: tuple[str, ...] = tuple(normalize_text(spoken_text))

    result: AlignmentResult = (cached_alignment(target, spoken) if use_cache
                               else align(target, spoken))
    scores: ScoreSet = score(target, spoken, result.verdicts,
                             result.stats, duration_seconds)
    overall: int | None = overall_score(scores)

    logger.debug("Scored %d/%d words, overall=%s",
                 result.stats.correct_matches, len(target), overall)

    return Evaluation(
        target_words=target,
        spoken_words=spoken,
        verdicts=result.verdicts,
        stats=result.stats,
        scores=scores,
        overall=overall,
        duration_seconds=duration_seconds,
    )
