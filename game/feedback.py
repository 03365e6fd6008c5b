from __future__ import annotations

from enum import Enum

from .errors import InvalidFeedback


class FeedbackKind(Enum):
    UNKNOWN = "unknown"
    KNOWN = "known"
    COMPLETE = "complete"


class Feedback:
    """
        Response to a guess: how many pegs match exactly and by color only.
    Attributes:
        kind (FeedbackKind): UNKNOWN (nothing scored yet), KNOWN or COMPLETE.
        full (int): Pegs with correct color in the correct position.
        partial (int): Pegs with correct color in the wrong position.

    Complete compares equal to Known(code_length, 0): both land in the same
    partition bucket. Only the Complete marker reports is_complete."""

    __slots__ = ("kind", "full", "partial")

    def __init__(self, kind: FeedbackKind, full: int = 0, partial: int = 0):
        object.__setattr__(self, "kind", kind)
        object.__setattr__(self, "full", full)
        object.__setattr__(self, "partial", partial)

    @classmethod
    def unknown(cls) -> Feedback:
        return cls(FeedbackKind.UNKNOWN)

    @classmethod
    def known(cls, full: int, partial: int, code_length: int | None = None) -> Feedback:
        """
        Build Known(full, partial).

        Args:
            full (int): Exact matches.
            partial (int): Color-only matches.
            code_length (int | None): When given, enforce full + partial <= L.

        Raises:
            InvalidFeedback: on negative counts or too many pegs.
        """

        for label, value in (("full", full), ("partial", partial)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidFeedback(
                    f"{label} must be a non-negative integer, but got {value!r}."
                )
        if code_length is not None and full + partial > code_length:
            raise InvalidFeedback(
                f"full + partial must be at most {code_length}, "
                f"but got {full} + {partial}."
            )
        return cls(FeedbackKind.KNOWN, full, partial)

    @classmethod
    def complete(cls, code_length: int) -> Feedback:
        return cls(FeedbackKind.COMPLETE, code_length, 0)

    @property
    def is_complete(self) -> bool:
        return self.kind is FeedbackKind.COMPLETE

    @property
    def is_unknown(self) -> bool:
        return self.kind is FeedbackKind.UNKNOWN

    def normalized(self, code_length: int) -> Feedback:
        """Return Complete for Known(code_length, 0), else self."""
        if self.kind is FeedbackKind.KNOWN and self.full == code_length:
            return Feedback.complete(code_length)
        return self

    def as_tuple(self) -> tuple[int, int]:
        return (self.full, self.partial)

    def _key(self):
        if self.kind is FeedbackKind.UNKNOWN:
            return None
        return (self.full, self.partial)

    def __setattr__(self, name, value):
        raise AttributeError("Feedback is immutable")

    def __eq__(self, other):
        if not isinstance(other, Feedback):
            return NotImplemented
        if self.is_unknown or other.is_unknown:
            return self.kind is other.kind
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        if self.kind is FeedbackKind.UNKNOWN:
            return "Unknown"
        if self.kind is FeedbackKind.COMPLETE:
            return "Complete"
        return f"Known({self.full}, {self.partial})"

    __str__ = __repr__
