from __future__ import annotations

import threading

import numpy as np

from .feedback import Feedback
from .ruleset import DEFAULT_RULES, validate_rules
from .scoring import feedback_index_table, score_matrix
from .secret_code import Code


def generate_code_space(rules=None) -> list[Code]:
    """
    Enumerate every code as an L-digit base-K counter, position 0 least
    significant: [0,0,0,0], [1,0,0,0], ..., [K-1,K-1,K-1,K-1].

    Args:
        rules (dict | None): Ruleset defining code_length and num_colors.

    Returns:
        list[Code]: All K**L codes; codes[i].index == i.
    """

    rules = validate_rules(rules or DEFAULT_RULES)
    total = rules["num_colors"] ** rules["code_length"]
    return [Code.from_index(i, rules) for i in range(total)]


def generate_feedback_space(rules=None) -> list[Feedback]:
    """
    Enumerate Known(full, partial) for full in [0, L], partial in
    [0, L - full]. Known(L, 0) stands in for Complete.
    """

    rules = validate_rules(rules or DEFAULT_RULES)
    length = rules["code_length"]
    return [
        Feedback.known(full, partial, length)
        for full in range(length + 1)
        for partial in range(length + 1 - full)
    ]


class CodeSpace:
    """
    Read-only lookup tables for one ruleset.

    Attributes:
        rules: dict
        codes: list[Code] in enumeration order
        feedbacks: list[Feedback] in enumeration order
        digits: np.ndarray (N, L) color id per position
        color_counts: np.ndarray (N, K) pegs per color
        index_table: np.ndarray (L+1, L+1) (full, partial) -> feedback index
    """

    def __init__(self, rules=None, max_table_size: int = 4_000_000):
        self.rules = validate_rules(rules or DEFAULT_RULES)
        self.code_length = self.rules["code_length"]
        self.num_colors = self.rules["num_colors"]
        self.size = self.num_colors ** self.code_length

        self.codes = generate_code_space(self.rules)
        self.feedbacks = generate_feedback_space(self.rules)
        self.index_table = feedback_index_table(self.code_length)

        idx = np.arange(self.size, dtype=np.int64)
        powers = self.num_colors ** np.arange(self.code_length, dtype=np.int64)
        self.digits = ((idx[:, None] // powers[None, :]) % self.num_colors).astype(
            np.uint8
        )
        self.color_counts = np.stack(
            [(self.digits == k).sum(axis=1) for k in range(self.num_colors)],
            axis=1,
        ).astype(np.uint8)

        self.max_table_size = max_table_size
        self._table = None
        self._table_lock = threading.Lock()

    @property
    def num_feedbacks(self) -> int:
        return len(self.feedbacks)

    def feedback_index(self, feedback: Feedback) -> int:
        """Position of a feedback in the enumeration (Complete -> Known(L, 0))."""
        if feedback.is_unknown:
            raise ValueError("Unknown feedback has no partition bucket.")
        return int(self.index_table[feedback.full, feedback.partial])

    def indices(self, codes) -> np.ndarray:
        """Enumeration indices for an iterable of codes."""
        return np.fromiter((c.index for c in codes), dtype=np.int64)

    def _full_table(self) -> np.ndarray | None:
        # Lazily cache the whole N x N matrix when it fits.
        if self.size * self.size > self.max_table_size:
            return None
        if self._table is None:
            with self._table_lock:
                if self._table is None:
                    self._table = self._compute(
                        np.arange(self.size), np.arange(self.size)
                    )
        return self._table

    def _compute(self, guesses: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        return score_matrix(
            self.digits[guesses],
            self.digits[candidates],
            self.color_counts[guesses],
            self.color_counts[candidates],
            self.index_table,
        )

    def feedback_matrix(self, guesses: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        """
        Feedback indices for every (guess, candidate) pair.

        Args:
            guesses: enumeration indices of the guesses (G,)
            candidates: enumeration indices of the candidates (C,)

        Returns:
            np.ndarray: (G, C) feedback indices.
        """

        table = self._full_table()
        if table is not None:
            return table[np.ix_(guesses, candidates)]
        return self._compute(guesses, candidates)

    def partition_counts(self, guesses: np.ndarray, candidates: np.ndarray) -> np.ndarray:
        """
        Candidate-set size left by each feedback, for each guess.

        Returns:
            np.ndarray: (G, F) counts; row g column f is
            count(candidates, guesses[g], feedbacks[f]).
        """

        fb = self.feedback_matrix(guesses, candidates).astype(np.int64)
        n_fb = self.num_feedbacks
        offsets = np.arange(len(guesses), dtype=np.int64)[:, None] * n_fb
        flat = np.bincount((fb + offsets).ravel(), minlength=len(guesses) * n_fb)
        return flat.reshape(len(guesses), n_fb)
