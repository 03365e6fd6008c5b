from __future__ import annotations

from typing import Sequence

from game.codespace import generate_feedback_space
from game.errors import EmptyCandidateSet
from game.feedback import Feedback
from game.secret_code import Code
from solver.candidates import partition_sizes


def worst_feedback(candidates: Sequence[Code], guess: Code) -> Feedback:
    """
    Pick the feedback that leaves the candidate set as large as possible.

    Args:
        candidates: Codes still consistent with the history.
        guess: The code the player submitted.

    Returns:
        Feedback: The enumerated feedback with the largest count. On a tie
        the one enumerated last wins, so Known(L, 0) is returned whenever it
        ties for the maximum.

    Raises:
        EmptyCandidateSet: if candidates is empty.
    """

    if len(candidates) == 0:
        raise EmptyCandidateSet("No candidates left to answer for.")

    sizes = partition_sizes(candidates, guess)
    best = None
    best_count = -1
    for feedback in generate_feedback_space(guess.rules):
        count = sizes.get(feedback, 0)
        if count >= best_count:
            best, best_count = feedback, count
    return best
