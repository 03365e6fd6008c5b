from .errors import InvalidPieceIdentifier
from .ruleset import DEFAULT_RULES


def make_piece(piece_id, rules=None) -> int:
    """
    Validate a piece identifier against the palette.

    Args:
        piece_id (int): Color index, 0 based.
        rules (dict | None): Ruleset defining num_colors.

    Returns:
        int: The identifier, unchanged.

    Raises:
        InvalidPieceIdentifier: if the id is not an int in [0, num_colors).
    """

    rules = rules or DEFAULT_RULES
    if (
        isinstance(piece_id, bool)
        or not isinstance(piece_id, int)
        or not 0 <= piece_id < rules["num_colors"]
    ):
        raise InvalidPieceIdentifier(
            f"Invalid piece '{piece_id}'. "
            f"Allowed: 0..{rules['num_colors'] - 1}."
        )
    return piece_id


class Code:
    """
        An immutable sequence of pieces: a secret or a guess.
    Attributes:
        pieces (tuple[int, ...]): Color ids, position 0 first.
        rules (dict): The ruleset the code was validated against.
        index (int): Position of the code in the code space enumeration
        (base num_colors, position 0 least significant)."""

    __slots__ = ("pieces", "rules", "index")

    def __init__(self, pieces, rules=None):
        """
        Initialize a Code instance.

        Args:
            pieces (Iterable[int]): Color ids, one per position.
            rules (dict | None): Ruleset (defines length and palette).

        Raises:
            InvalidPieceIdentifier: on an unknown color or a wrong length.
        """

        rules = rules or DEFAULT_RULES
        pieces = tuple(make_piece(p, rules) for p in pieces)
        if len(pieces) != rules["code_length"]:
            raise InvalidPieceIdentifier(
                f"Code length must be {rules['code_length']}, "
                f"but got {len(pieces)}."
            )

        index = 0
        for p in reversed(pieces):
            index = index * rules["num_colors"] + p

        object.__setattr__(self, "pieces", pieces)
        object.__setattr__(self, "rules", rules)
        object.__setattr__(self, "index", index)

    @classmethod
    def from_index(cls, index, rules=None):
        """Build the code at a given enumeration index."""
        rules = rules or DEFAULT_RULES
        k = rules["num_colors"]
        pieces = []
        for _ in range(rules["code_length"]):
            index, digit = divmod(index, k)
            pieces.append(digit)
        return cls(pieces, rules)

    @classmethod
    def parse(cls, text, rules=None):
        """
        Parse a code from digits ('0123') or color letters ('RGBY').

        Args:
            text (str): Digits or symbols, spaces and commas ignored.
            rules (dict | None): Ruleset for the palette.

        Returns:
            Code: The parsed code.

        Raises:
            InvalidPieceIdentifier: on an unknown character or wrong length.
        """

        rules = rules or DEFAULT_RULES
        symbols = [s.upper() for s in rules["symbols"]]
        pieces = []
        for ch in text.replace(" ", "").replace(",", "").upper():
            if ch.isdigit():
                pieces.append(int(ch))
            elif ch in symbols:
                pieces.append(symbols.index(ch))
            else:
                allowed = ", ".join(rules["symbols"])
                raise InvalidPieceIdentifier(
                    f"Invalid color '{ch}'. Allowed: {allowed} or digits."
                )
        return cls(pieces, rules)

    def __setattr__(self, name, value):
        raise AttributeError("Code is immutable")

    def __len__(self):
        return len(self.pieces)

    def __iter__(self):
        return iter(self.pieces)

    def __getitem__(self, i):
        return self.pieces[i]

    def __eq__(self, other):
        """
        Check equality between this Code and another object.

        Args:
            other (Code | tuple | list): Code or plain sequence of ids.

        Returns:
            bool: True if the pieces are equal.
        """

        if isinstance(other, Code):
            return self.pieces == other.pieces
        if isinstance(other, (tuple, list)):
            return self.pieces == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self.pieces)

    def __lt__(self, other):
        return self.index < other.index

    def as_string(self):
        """
        Return the code as color letters (e.g. 'RGBY').
        Returns:
            str: The code as a string.
        """
        return "".join(self.rules["symbols"][p] for p in self.pieces)

    def color_names(self):
        """Return the color names of the pieces."""
        return [self.rules["colors"][p] for p in self.pieces]

    def __repr__(self):
        return f"Code({list(self.pieces)!r})"

    def __str__(self):
        return self.as_string()
