"""
Tests for text and JSON report rendering.
"""

import json

import pytest

from twistscore.aligner import MISSING_WORD, Correct, Incorrect, Pending
from twistscore.evaluation import evaluate
from twistscore.report import (
    render_json,
    render_text,
    similarity,
    verdict_to_dict,
)


class TestSimilarity:
    """Tests for near-miss similarity."""

    def test_correct_has_no_similarity(self) -> None:
        assert similarity(Correct("cat")) is None

    def test_pending_has_no_similarity(self) -> None:
        assert similarity(Pending("cat")) is None

    def test_missing_has_no_similarity(self) -> None:
        assert similarity(Incorrect("cat", MISSING_WORD)) is None

    def test_misheard_word(self) -> None:
        assert similarity(Incorrect("cat", "hat")) == pytest.approx(200 / 3)


class TestVerdictToDict:
    """Tests for JSON-friendly verdicts."""

    def test_correct(self) -> None:
        assert verdict_to_dict(Correct("a")) == {"word": "a", "status": "correct"}

    def test_incorrect(self) -> None:
        assert verdict_to_dict(Incorrect("a", "b")) == {
            "word": "a", "status": "incorrect", "spoken": "b"}

    def test_pending(self) -> None:
        assert verdict_to_dict(Pending("a")) == {"word": "a", "status": "pending"}


class TestRenderText:
    """Tests for the text report."""

    def test_lists_words_and_scores(self) -> None:
        text: str = render_text(evaluate("red fox runs", "red fix runs", 2.0))
        assert "✓ red" in text
        assert '✗ fox (heard "fix")' in text
        assert "accuracy" in text
        assert "Correct words: 2 / 3" in text
        assert "Duration:      2.0s" in text

    def test_hide_words(self) -> None:
        text: str = render_text(evaluate("red fox", "red fox", 1.0), show_words=False)
        assert "Words:" not in text
        assert "Scores:" in text

    def test_similarity_annotation(self) -> None:
        text: str = render_text(
            evaluate("cat", "hat", 1.0), show_similarity=True)
        assert '✗ cat (heard "hat", 67% similar)' in text

    def test_no_overall_score(self) -> None:
        text: str = render_text(evaluate("red fox", ""))
        assert "· red" in text
        assert "Overall:       -" in text
        assert "Duration" not in text

    def test_overall_with_rating(self) -> None:
        text: str = render_text(evaluate("red fox runs", "red fox runs", 1.5))
        assert "Overall:       100% (Excellent!)" in text


class TestRenderJson:
    """Tests for the JSON report."""

    def test_round_trips_through_json(self) -> None:
        data = json.loads(render_json(evaluate("red fox runs", "red dog fox runs", 2.0)))
        assert [w["status"] for w in data["words"]] == ["correct"] * 3
        assert data["stats"] == {"totalSpoken": 4, "extraWords": 2, "correctMatches": 3}
        assert data["scores"]["fluency"] == 80
        assert data["overall"] == 94
        assert data["rating"] == "Excellent!"
        assert data["isComplete"] is True
        assert data["duration"] == 2.0

    def test_no_attempt(self) -> None:
        data = json.loads(render_json(evaluate("red fox", None)))
        assert data["overall"] is None
        assert data["rating"] is None
        assert data["isComplete"] is False
