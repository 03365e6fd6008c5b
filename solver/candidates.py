from __future__ import annotations

from collections import Counter
from typing import Iterable

from game.feedback import Feedback
from game.scoring import score
from game.secret_code import Code


def filter_candidates(
    candidates: Iterable[Code], guess: Code, feedback: Feedback
) -> list[Code]:
    """
    Keep the codes that would have produced `feedback` for `guess`.

    Args:
        candidates: Codes still consistent with the history.
        guess: The guessed code.
        feedback: Feedback observed for the guess.

    Returns:
        list[Code]: Consistent codes, in their original order.
    """
    return [c for c in candidates if score(c, guess) == feedback]


def count_candidates(
    candidates: Iterable[Code], guess: Code, feedback: Feedback
) -> int:
    """Size of filter_candidates(...) without building the list."""
    return sum(1 for c in candidates if score(c, guess) == feedback)


def partition_sizes(candidates: Iterable[Code], guess: Code) -> Counter:
    """
    Bucket the candidates by the feedback they give to `guess`.

    Returns:
        Counter: Feedback -> number of candidates; Complete and
        Known(L, 0) share one bucket.
    """
    return Counter(score(c, guess) for c in candidates)


def apply_history(candidates: Iterable[Code], history) -> list[Code]:
    """Filter by every (guess, feedback) row of a history in order."""
    remaining = list(candidates)
    for guess, feedback in history:
        remaining = filter_candidates(remaining, guess, feedback)
    return remaining
