"""Exceptions raised by the solving engine.

All of them derive from ValueError: each one marks a caller or input bug
(bad identifier, impossible feedback, contradictory history, bad board size).
"""


class MastermindError(ValueError):
    """Base class for contract violations in the solver core."""


class InvalidPieceIdentifier(MastermindError):
    """A piece identifier outside [0, num_colors)."""


class InvalidFeedback(MastermindError):
    """Negative peg counts or more pegs than positions."""


class EmptyCandidateSet(MastermindError):
    """No code is consistent with the feedback supplied so far."""


class ConfigurationError(MastermindError):
    """Non-positive code length or palette size."""


class GameOverError(MastermindError):
    """A guess was submitted to a session that already finished."""
