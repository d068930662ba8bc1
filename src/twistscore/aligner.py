"""
Word alignment between a target phrase and a spoken transcript.

Walks both token sequences left to right with two cursors and assigns a
verdict to every target word. Handles the common ways speech recognition
mangles a tongue twister:
- compound words split apart ("highhats" heard as "high hats")
- split words merged ("high hats" heard as "highhats")
- inserted words (stutters, repeats, false recognitions)
- dropped or misheard words

Cursors never move backwards, so alignment is linear in the input size
(each step does at most a bounded look-ahead).
"""

import logging
from dataclasses import dataclass, field
from typing import ClassVar, Literal, Sequence

logger = logging.getLogger(__name__)

# How far ahead (in both sequences) to search for a resynchronization point
MAX_LOOKAHEAD: int = 5
# Number of tokens that may be joined when recovering compound/split words
MIN_COMPOUND_LENGTH: int = 2
MAX_COMPOUND_LENGTH: int = 3
# Annotation for a skipped target word with no spoken counterpart
MISSING_WORD: str = "(missing)"

Status = Literal["pending", "correct", "incorrect"]


@dataclass(frozen=True)
class Correct:
    """Target word that was spoken correctly."""
    word: str
    status: ClassVar[Status] = "correct"


@dataclass(frozen=True)
class Incorrect:
    """Target word that was misspoken, with what was heard instead."""
    word: str
    spoken: str
    status: ClassVar[Status] = "incorrect"


@dataclass(frozen=True)
class Pending:
    """Target word that has not been reached yet."""
    word: str
    status: ClassVar[Status] = "pending"


WordVerdict = Correct | Incorrect | Pending


@dataclass(frozen=True)
class AlignmentStats:
    """Counters computed alongside the verdicts."""
    total_spoken: int = 0
    extra_words: int = 0
    correct_matches: int = 0


@dataclass(frozen=True)
class AlignmentResult:
    """Verdicts (one per target word, in target order) and statistics."""
    verdicts: tuple[WordVerdict, ...] = ()
    stats: AlignmentStats = field(default_factory=AlignmentStats)


def match_compound(target_word: str, spoken: Sequence[str], start: int) -> int:
    """
    Check whether consecutive spoken words join up to the target word.

    Example: target "highhats" against spoken ["high", "hats"].

    Returns:
        Number of spoken words consumed, or 0 if there is no match
    """
    for length in range(MIN_COMPOUND_LENGTH, MAX_COMPOUND_LENGTH + 1):
        if start + length > len(spoken):
            break
        if ''.join(spoken[start:start + length]) == target_word:
            return length
    return 0


def match_split(target: Sequence[str], start: int, spoken_word: str) -> int:
    """
    Check whether consecutive target words join up to the spoken word.

    Example: target ["high", "hats"] against spoken "highhats".

    Returns:
        Number of target words consumed, or 0 if there is no match
    """
    for length in range(MIN_COMPOUND_LENGTH, MAX_COMPOUND_LENGTH + 1):
        if start + length > len(target):
            break
        if ''.join(target[start:start + length]) == spoken_word:
            return length
    return 0


def find_sync_point(
    target: Sequence[str],
    spoken: Sequence[str],
    target_idx: int,
    spoken_idx: int,
    max_lookahead: int = MAX_LOOKAHEAD
) -> tuple[int, int] | None:
    """
    Find the nearest point where both sequences agree again.

    Target offsets are scanned in the outer loop and spoken offsets in the
    inner loop, both from 0 upward, so the first hit has the smallest target
    offset (and the smallest spoken offset for it). The (0, 0) pair is
    skipped since it is the mismatch being recovered from.

    Returns:
        (target_offset, spoken_offset), or None if nothing matches
    """
    for t_off in range(max_lookahead + 1):
        if target_idx + t_off >= len(target):
            break
        target_word: str = target[target_idx + t_off]
        for s_off in range(max_lookahead + 1):
            if spoken_idx + s_off >= len(spoken):
                break
            if t_off == 0 and s_off == 0:
                continue
            if target_word == spoken[spoken_idx + s_off]:
                return t_off, s_off
    return None


def align(target: Sequence[str], spoken: Sequence[str]) -> AlignmentResult:
    """
    Align spoken tokens against target tokens.

    Args:
        target: Normalized target phrase tokens
        spoken: Normalized transcript tokens

    Returns:
        AlignmentResult with exactly one verdict per target token
    """
    if not spoken:
        # Nothing attempted yet
        return AlignmentResult(
            verdicts=tuple(Pending(word) for word in target),
            stats=AlignmentStats(),
        )

    verdicts: list[WordVerdict] = []
    target_idx: int = 0
    spoken_idx: int = 0
    correct_matches: int = 0

    while target_idx < len(target):
        target_word: str = target[target_idx]

        # Spoken input ran out part way through
        if spoken_idx >= len(spoken):
            verdicts.append(Pending(target_word))
            target_idx += 1
            continue

        spoken_word: str = spoken[spoken_idx]

        if target_word == spoken_word:
            verdicts.append(Correct(target_word))
            correct_matches += 1
            target_idx += 1
            spoken_idx += 1
            continue

        consumed: int = match_compound(target_word, spoken, spoken_idx)
        if consumed:
            verdicts.append(Correct(target_word))
            correct_matches += 1
            target_idx += 1
            spoken_idx += consumed
            continue

        consumed = match_split(target, target_idx, spoken_word)
        if consumed:
            for word in target[target_idx:target_idx + consumed]:
                verdicts.append(Correct(word))
                correct_matches += 1
            target_idx += consumed
            spoken_idx += 1
            continue

        sync: tuple[int, int] | None = find_sync_point(
            target, spoken, target_idx, spoken_idx)
        if sync is not None:
            t_off, s_off = sync
            logger.debug(
                "Resync at target=%d spoken=%d: skipping %d target, %d spoken",
                target_idx, spoken_idx, t_off, s_off)
            for i in range(t_off):
                heard: str = (spoken[spoken_idx + i]
                              if spoken_idx + i < len(spoken) else MISSING_WORD)
                verdicts.append(Incorrect(target[target_idx + i], heard))
            # The word at the new position is matched on the next pass
            target_idx += t_off
            spoken_idx += s_off
            continue

        logger.debug("No sync point for '%s' (heard '%s')",
                     target_word, spoken_word)
        verdicts.append(Incorrect(target_word, spoken_word))
        target_idx += 1
        spoken_idx += 1

    # Length surplus plus words consumed past the end of the target.
    # These overlap when the speaker overshoots, so the total is a coarse
    # penalty measure rather than an exact count of wasted words.
    surplus: int = max(0, len(spoken) - len(target))
    overrun: int = max(0, spoken_idx - len(target))

    return AlignmentResult(
        verdicts=tuple(verdicts),
        stats=AlignmentStats(
            total_spoken=len(spoken),
            extra_words=surplus + overrun,
            correct_matches=correct_matches,
        ),
    )
