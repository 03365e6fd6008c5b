from __future__ import annotations

import argparse
import sys

from game.errors import ConfigurationError
from game.ruleset import make_rules
from ui.cli import adversarial, beat_game, check_correctness, gameloop, play_with_target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mastermind minimax solver",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py --correctness
  python main.py --correctness --length 3 --colors 4 --plot results/3x4.png
  python main.py --beat
""",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-t", "--target", action="store_true", help="Play with a known target")
    mode.add_argument("-c", "--correctness", action="store_true", help="Solve every code and report statistics")
    mode.add_argument("-b", "--beat", action="store_true", help="Let the solver guess your code")
    mode.add_argument("-a", "--adversarial", action="store_true", help="Guess against an adversarial code-maker")
    parser.add_argument("--length", type=int, default=4, help="Pegs per code (default: 4)")
    parser.add_argument("--colors", type=int, default=6, help="Number of colors (default: 6)")
    parser.add_argument("--workers", type=int, default=None, help="Threads for --correctness (default: CPUs - 1)")
    parser.add_argument("--plot", default=None, help="With --correctness, write a guess histogram PNG here")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        rules = make_rules(args.length, args.colors)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    try:
        if args.target:
            play_with_target(rules)
        elif args.correctness:
            check_correctness(rules, plot_path=args.plot, max_workers=args.workers)
        elif args.beat:
            beat_game(rules)
        elif args.adversarial:
            adversarial(rules)
        else:
            gameloop(rules)
    except (KeyboardInterrupt, EOFError):
        print("\nExiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
