# Command-line interface (text-based play)

from game.board import render_code, render_game
from game.errors import InvalidFeedback, InvalidPieceIdentifier
from game.feedback import Feedback
from game.ruleset import DEFAULT_RULES
from game.secret_code import Code
from game.session import GameSession, SessionState
from solver.harness import run_harness


def print_palette(rules):
    emoji = rules["display"]["emoji_map"]
    print(
        "  ".join(
            f"{i}/{sym} {emoji[i]}" for i, sym in enumerate(rules["symbols"])
        )
    )


def read_code(rules, prompt=">>> "):
    """Prompt until the user enters a valid code (digits or color letters)."""
    print_palette(rules)
    while True:
        user_input = input(prompt).strip()
        try:
            return Code.parse(user_input, rules)
        except InvalidPieceIdentifier as e:
            print(f"Invalid input: {e}")


def parse_feedback(text, rules):
    """
    Parse 'F'/'P' letters (full/partial pegs) into feedback.

    Raises:
        InvalidFeedback: on other characters or too many pegs.
    """

    full = 0
    partial = 0
    for ch in text.strip().upper():
        if ch == "F":
            full += 1
        elif ch == "P":
            partial += 1
        elif ch not in " -.":
            raise InvalidFeedback(f"Invalid character '{ch}'.")
    feedback = Feedback.known(full, partial, rules["code_length"])
    return feedback.normalized(rules["code_length"])


def read_feedback(rules, prompt=">>> "):
    print("'F' => Full/Black\n'P' => Partial/White")
    while True:
        try:
            return parse_feedback(input(prompt), rules)
        except InvalidFeedback as e:
            print(f"Invalid input: {e}")


def play_with_target(rules=None):
    """The user sets a secret, then guesses it with the solver's hints."""
    rules = rules or DEFAULT_RULES
    print("=== Play with Target ===")
    print("Secret code:")
    session = GameSession(rules, target=read_code(rules))
    print(render_game(session.game))

    while not session.is_over:
        print(
            f"\nBest move out of {len(session.candidates)} possibilities: "
            f"{render_code(session.suggest(), rules)}"
        )
        session.submit(read_code(rules))
        print(render_game(session.game))

    print("\nCongratulations, you cracked the code!")


def check_correctness(rules=None, plot_path=None, max_workers=None):
    """Solve every code and print the statistics."""
    rules = rules or DEFAULT_RULES
    print("=== Check Correctness ===")
    report = run_harness(rules, max_workers=max_workers, progress=True)
    print(f"Guesses per game      : {report.histogram()}\n")
    if plot_path:
        from plot.plot import plot_guess_distribution

        plot_guess_distribution(report, plot_path)
        print(f"Plot written to {plot_path}")
    return report


def beat_game(rules=None):
    """The solver guesses the user's hidden code from F/P feedback."""
    rules = rules or DEFAULT_RULES
    print("=== Beat the Game ===")
    session = GameSession(rules)

    while not session.is_over:
        best_move = session.suggest()
        print(
            f"Best move from {len(session.candidates)} possibilities: "
            f"{render_code(best_move, rules)}"
        )
        print("Outcome:")
        session.record(best_move, read_feedback(rules))

    if session.state is SessionState.UNSATISFIABLE:
        print("No possible solutions: the feedback was contradictory.")
    else:
        print(f"Solved in {len(session.history)} guesses.")
    print()


def adversarial(rules=None):
    """The user guesses against a code-maker that never commits to a secret."""
    rules = rules or DEFAULT_RULES
    print("=== Adversarial ===")
    session = GameSession(rules)
    print(render_game(session.game))

    while not session.is_over:
        session.submit(read_code(rules))
        print(render_game(session.game))
        print(f"{len(session.candidates)} codes still possible.")

    print(f"\nFound it in {len(session.history)} guesses.\n")


MODES = {
    "1": ("Play With Target", play_with_target),
    "2": ("Check Correctness", check_correctness),
    "3": ("Beat Game", beat_game),
    "4": ("Adversarial", adversarial),
}


def gameloop(rules=None):
    rules = rules or DEFAULT_RULES
    while True:
        print(" ======= Menu =======")
        for key, (label, _) in MODES.items():
            print(f"- {key} {label}")

        choice = input(">>> ").strip().lower()
        if choice == "exit":
            break
        if choice not in MODES:
            print("Invalid value. Please enter 1, 2, 3, or 4, or 'exit' to quit")
            continue

        MODES[choice][1](rules)
