from __future__ import annotations

from enum import Enum

from solver.candidates import filter_candidates
from solver.oracle import worst_feedback
from solver.solver_manager import default_solver

from .board import Game
from .codespace import generate_code_space
from .errors import GameOverError, InvalidFeedback
from .feedback import Feedback
from .ruleset import DEFAULT_RULES
from .scoring import score
from .secret_code import Code


class SessionState(Enum):
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    UNSATISFIABLE = "unsatisfiable"


class GameSession:
    """
        Runs the guess / feedback / filter loop of one game.
    Attributes:
        rules (dict): The ruleset.
        game (Game): Target and history.
        candidates (list[Code]): Codes consistent with the history.
        state (SessionState): IN_PROGRESS until a Complete feedback
        (COMPLETE) or contradictory feedback empties the candidates
        (UNSATISFIABLE).

    With a target, feedback comes from the scorer. Without one, the
    adversarial oracle answers every guess."""

    def __init__(self, rules=None, target: Code | None = None, solver=None):
        self.rules = rules or (target.rules if target is not None else DEFAULT_RULES)
        self.game = Game(target, self.rules)
        if solver is not None:
            self.candidates = list(solver.space.codes)
        else:
            self.candidates = generate_code_space(self.rules)
        self.state = SessionState.IN_PROGRESS
        self._solver = solver

    @property
    def solver(self):
        if self._solver is None:
            self._solver = default_solver(self.rules)
        return self._solver

    @property
    def is_over(self):
        return self.state is not SessionState.IN_PROGRESS

    @property
    def history(self):
        return self.game.rows

    def suggest(self, *, progress=False) -> Code:
        """Minimax guess for the current candidates."""
        return self.solver.best_guess(self.candidates, progress=progress)

    def submit(self, guess: Code) -> Feedback:
        """
        Score a guess against the target (or the oracle) and update state.

        Args:
            guess (Code): The guessed code.

        Returns:
            Feedback: Complete or Known(full, partial).

        Raises:
            GameOverError: if the session already finished.
        """

        self._check_open()
        if self.game.target is not None:
            feedback = score(self.game.target, guess)
        else:
            feedback = worst_feedback(self.candidates, guess)
        return self._apply(guess, feedback)

    def record(self, guess: Code, feedback: Feedback) -> Feedback:
        """
        Apply feedback supplied by an outside code-maker.

        Raises:
            InvalidFeedback: if the feedback is Unknown or has too many pegs.
            GameOverError: if the session already finished.
        """

        self._check_open()
        if feedback.is_unknown:
            raise InvalidFeedback("Cannot record Unknown feedback for a guess.")
        Feedback.known(feedback.full, feedback.partial, self.rules["code_length"])
        return self._apply(guess, feedback)

    def _check_open(self):
        if self.is_over:
            raise GameOverError(f"Game is already {self.state.value}.")

    def _apply(self, guess: Code, feedback: Feedback) -> Feedback:
        # Known(L, 0) and Complete are the same outcome
        feedback = feedback.normalized(self.rules["code_length"])
        self.game.add_row(guess, feedback)

        # filter the candidates
        self.candidates = filter_candidates(self.candidates, guess, feedback)

        if feedback.is_complete:
            self.state = SessionState.COMPLETE
        elif not self.candidates:
            self.state = SessionState.UNSATISFIABLE
        return feedback


def solve(target: Code, rules=None, solver=None) -> Game:
    """
    Play minimax guesses against a known target until it is found.

    Returns:
        Game: The finished game; len(game.rows) is the number of guesses.
    """

    session = GameSession(rules or target.rules, target=target, solver=solver)
    while not session.is_over:
        session.submit(session.suggest())
    return session.game
