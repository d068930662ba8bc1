"""
Tests for the overall score.
"""

from twistscore.scorer import ScoreSet, overall_score


class TestOverallScore:
    """Mean of the strictly positive metrics."""

    def test_all_zero_is_none(self) -> None:
        assert overall_score(ScoreSet()) is None

    def test_single_positive_metric(self) -> None:
        assert overall_score(ScoreSet(accuracy=50)) == 50

    def test_zeros_are_ignored(self) -> None:
        assert overall_score(ScoreSet(accuracy=50, completion=100)) == 75

    def test_rounds_half_up(self) -> None:
        assert overall_score(ScoreSet(accuracy=1, speed=2)) == 2

    def test_all_metrics(self) -> None:
        scores: ScoreSet = ScoreSet(
            accuracy=100, speed=100, completion=100,
            fluency=80, consistency=100, rhythm=84,
        )
        assert overall_score(scores) == 94
