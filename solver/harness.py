from __future__ import annotations

import os
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field

import numpy as np

from game.codespace import CodeSpace
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code
from game.session import solve
from solver.solver_manager import MinimaxConfig, MinimaxSolver, log_print, progress_print


@dataclass
class HarnessReport:
    """Guesses needed to solve every code of a configuration."""
    total: int
    count: int
    max_code: Code
    max_guesses: int
    min_code: Code
    min_guesses: int
    average: float
    # guesses per target, indexed by enumeration index
    guesses: list[int] = field(default_factory=list, repr=False)
    duration_seconds: float = 0.0

    @property
    def max(self) -> tuple[Code, int]:
        return self.max_code, self.max_guesses

    @property
    def min(self) -> tuple[Code, int]:
        return self.min_code, self.min_guesses

    def histogram(self) -> dict[int, int]:
        """Number of games per guess count, sorted by guess count."""
        return dict(sorted(Counter(self.guesses).items()))

    def summary(self) -> str:
        return (
            f"Total guesses         : {self.total}\n"
            f"Number of games       : {self.count}\n"
            f"Maximum guesses       : {self.max_code} => {self.max_guesses}\n"
            f"Minimum guesses       : {self.min_code} => {self.min_guesses}\n"
            f"Average guesses       : {self.average:.4f}"
        )


def _solve_worker(target: Code, rules, solver: MinimaxSolver) -> tuple[int, int]:
    game = solve(target, rules, solver=solver)
    return target.index, len(game.rows)


def run_harness(
    rules=None,
    *,
    solver: MinimaxSolver | None = None,
    max_workers: int | None = None,
    progress: bool = False,
) -> HarnessReport:
    """
    Solve every code of the configuration and aggregate the guess counts.

    Args:
        rules: Ruleset; defaults to 4 pegs, 6 colors.
        solver: Solver shared by all games. Defaults to a caching,
            single-threaded solver, since the games already run in parallel.
        max_workers: Threads solving targets concurrently.
        progress: Whether to show progress output.

    Returns:
        HarnessReport: totals, extremes (lowest code wins ties) and average.
    """

    rules = rules or DEFAULT_RULES
    if solver is None:
        solver = MinimaxSolver(
            rules, config=MinimaxConfig(max_workers=1, use_cache=True)
        )
    space: CodeSpace = solver.space
    workers = max_workers or max(1, (os.cpu_count() or 4) - 1)

    guesses = np.zeros(space.size, dtype=np.int64)
    start = time.perf_counter()
    last_report = start

    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_solve_worker, target, space.rules, solver)
            for target in space.codes
        ]
        done = 0
        for fut in as_completed(futures):
            index, n = fut.result()
            guesses[index] = n
            done += 1

            now = time.perf_counter()
            if progress and now - last_report >= 1.0:
                progress_print(
                    f"Solved {done}/{space.size} codes "
                    f"({done / max(1e-9, now - start):.1f} games/sec)"
                )
                last_report = now

    # argmax/argmin return the first (lowest index) extreme
    max_index = int(np.argmax(guesses))
    min_index = int(np.argmin(guesses))
    total = int(guesses.sum())
    report = HarnessReport(
        total=total,
        count=space.size,
        max_code=space.codes[max_index],
        max_guesses=int(guesses[max_index]),
        min_code=space.codes[min_index],
        min_guesses=int(guesses[min_index]),
        average=total / space.size,
        guesses=guesses.tolist(),
        duration_seconds=round(time.perf_counter() - start, 2),
    )
    if progress:
        log_print(report.summary())
    return report
