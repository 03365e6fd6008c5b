from .errors import ConfigurationError

# Configuration: code length, palette, display.
DEFAULT_RULES = {
    "name": "classic",  # Identifier for this ruleset
    "code_length": 4,  # Number of pegs in the code
    "num_colors": 6,  # Available colors (see color set below)
    "max_attempts": 10,  # Guesses shown on an interactive board
    "colors": [
        "Red",
        "Green",
        "Blue",
        "Yellow",
        "Black",
        "White",
    ],
    "symbols": ["R", "G", "B", "Y", "K", "W"],  # one letter per color
    "display": {
        "emoji_map": {  # CLI rendering, keyed by piece id
            0: "🔴",
            1: "🟢",
            2: "🔵",
            3: "🟡",
            4: "⚫",
            5: "⚪",
        },
        "empty": "?",  # unfilled board cell
        "full_peg": "*",
        "partial_peg": "+",
    },
}


def make_rules(code_length=None, num_colors=None, name=None):
    """
    Build a ruleset for the given board size.

    Args:
        code_length (int | None): Pegs per code. Defaults to 4.
        num_colors (int | None): Palette size. Defaults to 6.
        name (str | None): Identifier, defaults to e.g. '4x6'.

    Returns:
        dict: A ruleset shaped like DEFAULT_RULES.

    Raises:
        ConfigurationError: if either size is not a positive integer.
    """

    length = DEFAULT_RULES["code_length"] if code_length is None else code_length
    colors = DEFAULT_RULES["num_colors"] if num_colors is None else num_colors

    for label, value in (("code_length", length), ("num_colors", colors)):
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ConfigurationError(
                f"{label} must be a positive integer, but got {value!r}."
            )

    if length == DEFAULT_RULES["code_length"] and colors == DEFAULT_RULES["num_colors"]:
        rules = dict(DEFAULT_RULES)
        if name is not None:
            rules["name"] = name
        return rules

    # Named colors first, generated names for larger palettes
    names = list(DEFAULT_RULES["colors"][:colors])
    symbols = list(DEFAULT_RULES["symbols"][:colors])
    emoji = {
        i: e
        for i, e in DEFAULT_RULES["display"]["emoji_map"].items()
        if i < colors
    }
    for i in range(len(names), colors):
        names.append(f"Color{i}")
        symbols.append(str(i))
        emoji[i] = f"{i:>2}"

    return {
        "name": name or f"{length}x{colors}",
        "code_length": length,
        "num_colors": colors,
        "max_attempts": DEFAULT_RULES["max_attempts"],
        "colors": names,
        "symbols": symbols,
        "display": {**DEFAULT_RULES["display"], "emoji_map": emoji},
    }


def validate_rules(rules):
    """Raise ConfigurationError unless the ruleset has a usable board size."""
    make_rules(rules.get("code_length"), rules.get("num_colors"))
    if len(rules.get("colors", [])) < rules["num_colors"]:
        raise ConfigurationError(
            f"Ruleset names {len(rules.get('colors', []))} colors, "
            f"but num_colors is {rules['num_colors']}."
        )
    return rules
