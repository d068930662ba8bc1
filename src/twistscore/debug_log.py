"""
Debug logging of scored attempts.

Appends to logs/attempts.log: one line per attempt with its scores, followed
by one line per word that was not marked correct. Useful for collecting
examples of transcripts that align badly.

Logging is disabled by default. Call enable() to turn it on.
"""

from datetime import datetime
from pathlib import Path

from .aligner import Incorrect, Pending
from .evaluation import Evaluation

# Log files location, relative to the working directory at write time
LOG_DIR_NAME: str = "logs"
ATTEMPT_LOG_NAME: str = "attempts.log"

# Global flag to control whether debug logging is enabled
_ENABLED: bool = False  # pylint: disable=invalid-name


def enable() -> None:
    """Enable debug logging."""
    global _ENABLED  # pylint: disable=global-statement
    _ENABLED = True


def disable() -> None:
    """Disable debug logging."""
    global _ENABLED  # pylint: disable=global-statement
    _ENABLED = False


def is_enabled() -> bool:
    """Check if debug logging is enabled."""
    return _ENABLED


def get_log_dir() -> Path:
    """Get the log directory in the current working directory."""
    return Path.cwd() / LOG_DIR_NAME


def get_attempt_log() -> Path:
    """Get the path of the attempt log."""
    return get_log_dir() / ATTEMPT_LOG_NAME


def _ensure_log_dir() -> None:
    """Create log directory if it doesn't exist."""
    get_log_dir().mkdir(parents=True, exist_ok=True)


def _timestamp() -> str:
    """Get current timestamp."""
    return datetime.now().strftime("%H:%M:%S.%f")[:-3]


def clear_log() -> None:
    """Clear the attempt log for a fresh session."""
    if not _ENABLED:
        return
    _ensure_log_dir()
    with open(get_attempt_log(), 'w', encoding='utf-8') as f:
        f.write(
            f"=== New session started at {datetime.now().isoformat()} ===\n\n")


def log_attempt(evaluation: Evaluation) -> None:
    """
    Log a scored attempt.

    Args:
        evaluation: The attempt to record
    """
    if not _ENABLED:
        return
    _ensure_log_dir()
    scores: str = " ".join(
        f"{name}={value}" for name, value in evaluation.scores.as_dict().items())
    with open(get_attempt_log(), 'a', encoding='utf-8') as f:
        f.write(
            f"[{_timestamp()}] target=\"{' '.join(evaluation.target_words)}\" "
            f"spoken=\"{' '.join(evaluation.spoken_words)}\"\n")
        f.write(
            f"                 overall={evaluation.overall} {scores} "
            f"extra={evaluation.stats.extra_words}\n")
        for index, verdict in enumerate(evaluation.verdicts):
            if isinstance(verdict, Incorrect):
                f.write(
                    f"                 {'incorrect':10} pos={index:3d} "
                    f"word=\"{verdict.word}\" heard=\"{verdict.spoken}\"\n")
            elif isinstance(verdict, Pending):
                f.write(
                    f"                 {'pending':10} pos={index:3d} "
                    f"word=\"{verdict.word}\"\n")
