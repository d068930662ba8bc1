"""
Performance metrics computed from alignment output.

Six independent scores, each an integer from 0 to 100:
- accuracy: share of target words spoken correctly
- speed: words per minute against an ideal band
- completion: share of target words reached
- fluency: longest unbroken correct run, penalised by extra words
- consistency: share of attempted words that were correct
- rhythm: balance between accuracy, speed and completion, penalised by
  extra words

Every function degrades to 0 on empty or missing input instead of raising.
"""

import math
from dataclasses import asdict, dataclass
from typing import Sequence

from .aligner import AlignmentStats, Correct, Incorrect, Pending, WordVerdict

# Words per minute considered ideal for a tongue twister
IDEAL_WPM_MIN: float = 100.0
IDEAL_WPM_MAX: float = 200.0
# Points lost per 100 wpm above the ideal band
OVERSPEED_DECAY: float = 50.0

# Extra-word penalties: (points per word, maximum penalty)
FLUENCY_EXTRA_PENALTY: tuple[int, int] = (10, 70)
RHYTHM_EXTRA_PENALTY: tuple[int, int] = (8, 60)
# Largest possible total deviation of three 0-100 scores from their mean
RHYTHM_MAX_DEVIATION: float = 200.0


@dataclass(frozen=True)
class ScoreSet:
    """The six metrics for one attempt."""
    accuracy: int = 0
    speed: int = 0
    completion: int = 0
    fluency: int = 0
    consistency: int = 0
    rhythm: int = 0

    def as_dict(self) -> dict[str, int]:
        """Return the metrics as an ordered name -> score mapping."""
        return asdict(self)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)


def _percentage(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def _extra_penalty(extra_words: int, penalty: tuple[int, int]) -> int:
    per_word, cap = penalty
    return min(cap, max(0, extra_words) * per_word)


def words_per_minute(word_count: int, duration_seconds: float | None) -> float:
    """Spoken words per minute, or 0.0 when it cannot be computed."""
    if (duration_seconds is None or not math.isfinite(duration_seconds)
            or duration_seconds <= 0 or word_count <= 0):
        return 0.0
    wpm: float = word_count / duration_seconds * 60
    # Tiny durations overflow to inf
    return wpm if math.isfinite(wpm) else 0.0


def accuracy_score(verdicts: Sequence[WordVerdict]) -> int:
    """Percentage of target words marked correct."""
    correct: int = sum(1 for v in verdicts if isinstance(v, Correct))
    return _percentage(correct, len(verdicts))


def speed_score(word_count: int, duration_seconds: float | None) -> int:
    """
    Score speaking pace.

    100 inside the ideal band, a linear ramp up to it from 0 wpm, and a
    gentler decay above it that reaches 0 at 400 wpm.
    """
    wpm: float = words_per_minute(word_count, duration_seconds)
    if wpm <= 0:
        return 0

    if IDEAL_WPM_MIN <= wpm <= IDEAL_WPM_MAX:
        return 100
    if wpm < IDEAL_WPM_MIN:
        return round_half_up(wpm / IDEAL_WPM_MIN * 100)
    return max(0, round_half_up(100 - (wpm - IDEAL_WPM_MAX) / 100 * OVERSPEED_DECAY))


def completion_score(verdicts: Sequence[WordVerdict]) -> int:
    """Percentage of target words that were attempted (not pending)."""
    attempted: int = sum(1 for v in verdicts if not isinstance(v, Pending))
    return _percentage(attempted, len(verdicts))


def longest_correct_run(verdicts: Sequence[WordVerdict]) -> int:
    """Longest streak of correct words. Pending words do not break a streak."""
    longest: int = 0
    current: int = 0
    for verdict in verdicts:
        if isinstance(verdict, Correct):
            current += 1
            longest = max(longest, current)
        elif isinstance(verdict, Incorrect):
            current = 0
    return longest


def fluency_score(verdicts: Sequence[WordVerdict], extra_words: int) -> int:
    """Longest correct streak as a percentage, minus the extra-word penalty."""
    if not verdicts:
        return 0
    streak: int = _percentage(longest_correct_run(verdicts), len(verdicts))
    return max(0, streak - _extra_penalty(extra_words, FLUENCY_EXTRA_PENALTY))


def consistency_score(verdicts: Sequence[WordVerdict]) -> int:
    """Percentage of attempted words that were correct."""
    attempted: list[WordVerdict] = [
        v for v in verdicts if not isinstance(v, Pending)]
    correct: int = sum(1 for v in attempted if isinstance(v, Correct))
    return _percentage(correct, len(attempted))


def rhythm_score(accuracy: int, speed: int, completion: int, extra_words: int) -> int:
    """
    Score how evenly balanced accuracy, speed and completion are.

    Returns 0 when nothing has been attempted (all three are 0).
    """
    if accuracy == 0 and speed == 0 and completion == 0:
        return 0

    mean: float = (accuracy + speed + completion) / 3
    deviation: float = (abs(accuracy - mean) + abs(speed - mean)
                        + abs(completion - mean))
    balance: int = max(
        0, round_half_up(100 - deviation / RHYTHM_MAX_DEVIATION * 100))
    return max(0, balance - _extra_penalty(extra_words, RHYTHM_EXTRA_PENALTY))


def score(  # pylint: disable=unused-argument
    target: Sequence[str],
    spoken: Sequence[str],
    verdicts: Sequence[WordVerdict],
    stats: AlignmentStats,
    duration_seconds: float | None
) -> ScoreSet:
    """
    Compute all six metrics for an aligned attempt.

    Args:
        target: Normalized target tokens (the verdicts mirror them one to one)
        spoken: Normalized spoken tokens (their count drives the speed score)
        verdicts: Verdicts from align()
        stats: Statistics from align()
        duration_seconds: Wall-clock length of the attempt, if known

    Returns:
        ScoreSet with every metric in [0, 100]
    """
    accuracy: int = accuracy_score(verdicts)
    speed: int = speed_score(len(spoken), duration_seconds)
    completion: int = completion_score(verdicts)

    return ScoreSet(
        accuracy=accuracy,
        speed=speed,
        completion=completion,
        fluency=fluency_score(verdicts, stats.extra_words),
        consistency=consistency_score(verdicts),
        rhythm=rhythm_score(accuracy, speed, completion, stats.extra_words),
    )


def overall_score(scores: ScoreSet) -> int | None:
    """
    Mean of the strictly positive metrics.

    Returns:
        Rounded mean, or None when every metric is 0 (no meaningful attempt)
    """
    positive: list[int] = [v for v in scores.as_dict().values() if v > 0]
    if not positive:
        return None
    return round_half_up(sum(positive) / len(positive))
