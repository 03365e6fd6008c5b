from __future__ import annotations

import numpy as np

from .feedback import Feedback
from .secret_code import Code


def score(reference: Code, guess: Code) -> Feedback:
    """
    Compare a guess with a reference code and compute Mastermind feedback.

    Args:
        reference (Code): The code being matched against (secret/candidate).
        guess (Code): The guessed code.

    Returns:
        Feedback: Complete if the codes are equal, else Known(full, partial).
        full: pegs with correct color in the correct position,
        partial: pegs with correct color but in the wrong position.

    Notes:
        Positions counted as full are excluded from partial-counting, and
        each reference peg is credited at most once.
    """

    if reference == guess:
        return Feedback.complete(len(reference))

    full = 0
    partial = 0
    remaining = [0] * reference.rules["num_colors"]
    consumed = [False] * len(reference)

    # Count color and position; tally the reference's unmatched colors.
    for i, (ref_piece, guess_piece) in enumerate(zip(reference, guess)):
        if ref_piece == guess_piece:
            full += 1
            consumed[i] = True
        else:
            remaining[ref_piece] += 1

    # Count color only, consuming the tally.
    for i, guess_piece in enumerate(guess):
        if not consumed[i] and remaining[guess_piece] > 0:
            partial += 1
            remaining[guess_piece] -= 1

    return Feedback.known(full, partial)


def feedback_index_table(code_length: int) -> np.ndarray:
    """
    Map (full, partial) to the position of Known(full, partial) in the
    feedback enumeration; impossible pairs map to -1.
    """

    table = np.full((code_length + 1, code_length + 1), -1, dtype=np.int16)
    idx = 0
    for full in range(code_length + 1):
        for partial in range(code_length + 1 - full):
            table[full, partial] = idx
            idx += 1
    return table


def score_matrix(
    guess_digits: np.ndarray,
    candidate_digits: np.ndarray,
    color_counts_guess: np.ndarray,
    color_counts_candidates: np.ndarray,
    index_table: np.ndarray,
) -> np.ndarray:
    """
    Score many (guess, candidate) pairs at once.

    Args:
        guess_digits: (G, L) color ids of the guesses.
        candidate_digits: (C, L) color ids of the candidates.
        color_counts_guess: (G, K) pegs per color for each guess.
        color_counts_candidates: (C, K) pegs per color for each candidate.
        index_table: output of feedback_index_table.

    Returns:
        np.ndarray: (G, C) feedback indices into the feedback enumeration.

    Notes:
        The multiset intersection sum_k min(count_g[k], count_c[k]) equals
        full + partial of the two-pass algorithm, so
        partial = intersection - full.
    """

    full = (guess_digits[:, None, :] == candidate_digits[None, :, :]).sum(
        axis=2, dtype=np.int16
    )
    common = np.minimum(
        color_counts_guess[:, None, :], color_counts_candidates[None, :, :]
    ).sum(axis=2, dtype=np.int16)
    return index_table[full, common - full]
