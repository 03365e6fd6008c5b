from __future__ import annotations

from .errors import GameOverError
from .feedback import Feedback
from .ruleset import DEFAULT_RULES
from .secret_code import Code


class Game:
    """
        Target code plus the ordered (guess, feedback) history of one game.
    Attributes:
        rules (dict): The ruleset.
        target (Code | None): The secret, None while it is unknown.
        rows (tuple): (guess, feedback) pairs, oldest first.

    History only grows through add_row, and a game is frozen once a
    Complete row is recorded."""

    def __init__(self, target: Code | None = None, rules=None):
        """Initialize an empty game; target stays None while it is unknown."""
        self.rules = rules or (target.rules if target is not None else DEFAULT_RULES)
        self._target = target
        self._rows: tuple[tuple[Code, Feedback], ...] = ()

    @property
    def target(self):
        return self._target

    @property
    def rows(self):
        return self._rows

    @property
    def is_won(self):
        return bool(self._rows) and self._rows[-1][1].is_complete

    @property
    def num_guesses(self):
        return len(self._rows)

    def add_row(self, guess: Code, feedback: Feedback):
        """
        Append a (guess, feedback) row.

        A Complete row on a game without a known target makes the guess the
        target.

        Raises:
            GameOverError: if the game is already won.
        """

        if self.is_won:
            raise GameOverError("Game is already complete.")
        self._rows = self._rows + ((guess, feedback),)
        if feedback.is_complete and self._target is None:
            self._target = guess

    def get_feedback_history(self):
        """Return the full history of guesses and feedback."""
        return list(self._rows)

    def reveal_code(self):
        """Return the secret code, or '?' cells while it is unknown."""
        return render_code(self.target, self.rules, emoji=False)

    def __str__(self):
        return render_game(self, emoji=False)


def render_cell(piece, rules=None, emoji=True) -> str:
    """One board cell; None is an unfilled cell."""
    rules = rules or DEFAULT_RULES
    if piece is None:
        return rules["display"]["empty"]
    if emoji:
        return rules["display"]["emoji_map"][piece]
    return rules["symbols"][piece]


def render_code(code: Code | None, rules=None, emoji=True) -> str:
    rules = rules or (code.rules if code is not None else DEFAULT_RULES)
    cells = code.pieces if code is not None else [None] * rules["code_length"]
    return " ".join(render_cell(p, rules, emoji) for p in cells)


def render_feedback(feedback: Feedback, rules=None) -> str:
    """Feedback as '[**+ ]', '[DONE]' or blank for Unknown."""
    rules = rules or DEFAULT_RULES
    length = rules["code_length"]
    if feedback.is_complete:
        return "[" + "DONE".center(length) + "]"
    if feedback.is_unknown:
        return "[" + " " * length + "]"
    display = rules["display"]
    return (
        "["
        + display["full_peg"] * feedback.full
        + display["partial_peg"] * feedback.partial
        + " " * (length - feedback.full - feedback.partial)
        + "]"
    )


def render_game(game: Game, emoji=True) -> str:
    """Render a text-based representation of the board (for CLI)."""

    rules = game.rules
    lines = [f"{render_code(game.target, rules, emoji)}  target"]
    lines.append("=" * (len(lines[0]) + 2))
    for guess, feedback in game.rows:
        lines.append(f"{render_code(guess, rules, emoji)}  {render_feedback(feedback, rules)}")
    return "\n".join(lines)
