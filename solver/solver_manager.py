from __future__ import annotations

import functools
import os
import threading
import time
from collections import OrderedDict
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from game.codespace import CodeSpace
from game.errors import ConfigurationError, EmptyCandidateSet
from game.feedback import Feedback
from game.ruleset import DEFAULT_RULES, make_rules
from game.secret_code import Code


# drop-in helper for progress and log line
def progress_print(msg: str) -> None:
    # overwrite same line, no newline
    print(f"\r\033[K{msg}", end="", flush=True)


def log_print(msg: str) -> None:
    # first terminate the progress line, then print normally
    print("\r\033[K", end="", flush=True)
    print(msg, flush=True)


@dataclass(frozen=True)
class MinimaxConfig:
    max_workers: int = max(1, (os.cpu_count() or 4) - 1)
    # guesses per worker task
    chunk_size: int = 128
    # remember the answer per candidate set
    use_cache: bool = True
    # candidate sets remembered, least recently used dropped first
    cache_size: int = 4096
    # largest N*N score matrix kept in memory
    max_table_size: int = 4_000_000

    def __post_init__(self):
        for name, minimum in (
            ("max_workers", 1),
            ("chunk_size", 1),
            ("cache_size", 0),
            ("max_table_size", 0),
        ):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
                raise ConfigurationError(
                    f"{name} must be an integer >= {minimum}, but got {value!r}."
                )


# (worst case, enumeration index)
GuessKey = tuple[int, int]


class MinimaxSolver:
    """
    Minimax Guess Selection:
    - for every code in the full space, the worst-case count over all
      feedbacks that do not end the game
    - best_guess = min over worst-case
    - ties go to the lowest enumeration index, whatever order the workers
      finish in

    The full-match bucket holds only the guess itself and ends the game, so
    it never counts towards the worst case. A lone candidate therefore
    scores 0 as its own guess and is always played.

    Attributes:
        cfg: MinimaxConfig
        space: CodeSpace
        rules: dict

    Methods:
        evaluate(...): Worst-case partition size of every guess.
        choose_guess(...): Best guess and its worst-case size.
        best_guess(...): Best guess only.
    """

    def __init__(
        self,
        rules=None,
        *,
        config: MinimaxConfig | None = None,
        space: CodeSpace | None = None,
    ):
        self.cfg = config or MinimaxConfig()
        self.space = space or CodeSpace(
            rules, max_table_size=self.cfg.max_table_size
        )
        self.rules = self.space.rules
        self._win_bucket = self.space.feedback_index(
            Feedback.complete(self.space.code_length)
        )
        self._cache: OrderedDict[bytes, GuessKey] = OrderedDict()
        self._cache_lock = threading.Lock()

    def _candidate_indices(self, candidates: Sequence[Code]) -> np.ndarray:
        if len(candidates) == 0:
            raise EmptyCandidateSet(
                "No candidates left: the feedback so far is contradictory."
            )
        return np.unique(self.space.indices(candidates))

    def _worst_cases(self, guesses: np.ndarray, cand_idx: np.ndarray) -> np.ndarray:
        counts = self.space.partition_counts(guesses, cand_idx)
        counts[:, self._win_bucket] = 0
        return counts.max(axis=1)

    def _evaluate_chunk_worker(
        self,
        *,
        guesses: np.ndarray,
        cand_idx: np.ndarray,
    ) -> GuessKey:
        """
        Worker: best key within one chunk of guesses.
        Args:
            guesses: enumeration indices of the chunk, ascending.
            cand_idx: enumeration indices of the candidates.
        Returns:
            The smallest (worst case, index) key of the chunk.
        """

        worst = self._worst_cases(guesses, cand_idx)
        # argmin returns the first, i.e. lowest index, minimum
        i = int(np.argmin(worst))
        return int(worst[i]), int(guesses[i])

    def evaluate(self, candidates: Sequence[Code]) -> np.ndarray:
        """
        Worst-case partition size of every code as the next guess.

        Returns:
            np.ndarray: (N,) where entry i belongs to space.codes[i].
        """
        cand_idx = self._candidate_indices(candidates)
        return self._worst_cases(np.arange(self.space.size), cand_idx)

    def _cache_get(self, key: bytes) -> GuessKey | None:
        with self._cache_lock:
            hit = self._cache.get(key)
            if hit is not None:
                self._cache.move_to_end(key)
            return hit

    def _cache_put(self, key: bytes, value: GuessKey) -> None:
        with self._cache_lock:
            self._cache[key] = value
            self._cache.move_to_end(key)
            while len(self._cache) > self.cfg.cache_size:
                self._cache.popitem(last=False)

    @property
    def cache_len(self) -> int:
        with self._cache_lock:
            return len(self._cache)

    def choose_guess(
        self, candidates: Sequence[Code], *, progress: bool = False
    ) -> tuple[Code, int]:
        """
        Choose the best guess using the minimax strategy.
        Args:
            candidates: Codes still consistent with the history.
            progress: Whether to show progress output.
        Returns:
            best_guess, best_worst_case
        Raises:
            EmptyCandidateSet: if candidates is empty.
        """

        cand_idx = self._candidate_indices(candidates)
        cache_key = cand_idx.tobytes()
        if self.cfg.use_cache:
            hit = self._cache_get(cache_key)
            if hit is not None:
                worst, index = hit
                return self.space.codes[index], worst

        all_guesses = np.arange(self.space.size, dtype=np.int64)
        chunks = [
            all_guesses[i : i + self.cfg.chunk_size]
            for i in range(0, self.space.size, self.cfg.chunk_size)
        ]

        best: GuessKey | None = None
        start = time.perf_counter()
        last_report = start

        if self.cfg.max_workers <= 1 or len(chunks) == 1:
            for chunk in chunks:
                key = self._evaluate_chunk_worker(guesses=chunk, cand_idx=cand_idx)
                best = key if best is None else min(best, key)
        else:
            # use ThreadPoolExecutor for parallel evaluation
            with ThreadPoolExecutor(max_workers=self.cfg.max_workers) as pool:
                futures = [
                    pool.submit(
                        self._evaluate_chunk_worker,
                        guesses=chunk,
                        cand_idx=cand_idx,
                    )
                    for chunk in chunks
                ]
                done = 0
                # collect results as they complete; min over full keys is
                # independent of completion order
                for fut in as_completed(futures):
                    key = fut.result()
                    done += 1
                    if best is None or key < best:
                        best = key

                    now = time.perf_counter()
                    # periodic progress report
                    if progress and now - last_report >= 2.0:
                        rate = done * self.cfg.chunk_size / max(1e-9, now - start)
                        progress_print(
                            f"Progress: {done}/{len(chunks)} chunks "
                            f"({rate:.1f} guesses/sec)"
                        )
                        last_report = now

        worst, index = best
        if progress:
            log_print(
                f"Best guess : {self.space.codes[index]}\n"
                f"min max    : {worst} of {len(cand_idx)} candidates\n"
            )

        if self.cfg.use_cache:
            self._cache_put(cache_key, best)
        return self.space.codes[index], worst

    def best_guess(self, candidates: Sequence[Code], *, progress: bool = False) -> Code:
        """Minimax guess for the candidate set."""
        return self.choose_guess(candidates, progress=progress)[0]

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()


@functools.lru_cache(maxsize=8)
def _shared_solver(code_length: int, num_colors: int) -> MinimaxSolver:
    return MinimaxSolver(make_rules(code_length, num_colors))


def default_solver(rules=None) -> MinimaxSolver:
    """Shared solver per board size."""
    rules = rules or DEFAULT_RULES
    return _shared_solver(rules["code_length"], rules["num_colors"])


def best_guess(candidates: Sequence[Code]) -> Code:
    """
    Minimax guess for a non-empty candidate set, using the shared solver
    for the candidates' board size.
    """
    if len(candidates) == 0:
        raise EmptyCandidateSet(
            "No candidates left: the feedback so far is contradictory."
        )
    return default_solver(candidates[0].rules).best_guess(candidates)
