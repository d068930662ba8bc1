"""
Twistscore - Scoring for spoken tongue twister attempts.

Aligns a speech recognition transcript against the target phrase word by
word and derives accuracy, speed, completion, fluency, consistency and
rhythm scores from the alignment.
"""

__version__ = "0.1.0"

from .aligner import (
    AlignmentResult,
    AlignmentStats,
    Correct,
    Incorrect,
    Pending,
    WordVerdict,
    align,
)
from .evaluation import Evaluation, evaluate, rating
from .normalizer import normalize_text
from .scorer import ScoreSet, overall_score, score

__all__ = [
    "normalize_text",
    "align",
    "AlignmentResult",
    "AlignmentStats",
    "WordVerdict",
    "Correct",
    "Incorrect",
    "Pending",
    "score",
    "overall_score",
    "ScoreSet",
    "evaluate",
    "Evaluation",
    "rating",
]
