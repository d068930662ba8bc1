"""
Tests for the attempt debug log.
"""

from pathlib import Path

import pytest

from twistscore import debug_log
from twistscore.evaluation import evaluate


@pytest.fixture
def log_dir(monkeypatch, tmp_path: Path) -> Path:
    """Run in a temporary directory so the attempt log lands there."""
    monkeypatch.chdir(tmp_path)
    log_dir = tmp_path / "logs"
    yield log_dir
    debug_log.disable()


class TestEnableDisable:
    """Tests for toggling the debug log."""

    def test_disabled_by_default(self, log_dir: Path) -> None:
        assert not debug_log.is_enabled()

    def test_enable_and_disable(self, log_dir: Path) -> None:
        debug_log.enable()
        assert debug_log.is_enabled()
        debug_log.disable()
        assert not debug_log.is_enabled()

    def test_disabled_writes_nothing(self, log_dir: Path) -> None:
        debug_log.log_attempt(evaluate("red fox", "red dog", 1.0))
        debug_log.clear_log()
        assert not log_dir.exists()


class TestLogAttempt:
    """Tests for the logged content."""

    def test_logs_scores_and_problem_words(self, log_dir: Path) -> None:
        debug_log.enable()
        debug_log.log_attempt(evaluate("red fox runs", "red dog", 1.0))

        content: str = (log_dir / "attempts.log").read_text(encoding="utf-8")
        assert 'target="red fox runs"' in content
        assert 'spoken="red dog"' in content
        assert "accuracy=33" in content
        assert 'word="fox" heard="dog"' in content
        assert "pending" in content
        assert 'word="runs"' in content

    def test_clear_log_starts_new_session(self, log_dir: Path) -> None:
        debug_log.enable()
        debug_log.log_attempt(evaluate("a", "a", 1.0))
        debug_log.clear_log()

        content: str = (log_dir / "attempts.log").read_text(encoding="utf-8")
        assert content.startswith("=== New session started at")
        assert "target=" not in content


class TestLogLocation:
    """The log follows the working directory at write time."""

    def test_follows_directory_change(self, log_dir: Path, monkeypatch, tmp_path: Path) -> None:
        elsewhere = tmp_path / "elsewhere"
        elsewhere.mkdir()
        monkeypatch.chdir(elsewhere)

        debug_log.enable()
        debug_log.log_attempt(evaluate("a", "a", 1.0))

        assert debug_log.get_attempt_log() == elsewhere / "logs" / "attempts.log"
        assert (elsewhere / "logs" / "attempts.log").exists()
        assert not log_dir.exists()
