import argparse
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from game.ruleset import make_rules
from solver.harness import HarnessReport, run_harness


def _annotate_points(ax, xs, ys, *, fmt="{:.2f}", dx=0, dy=6, fontsize=8):
        """
        Annotate points (x, y) on ax with formatted y values.

        Args:
            ax: matplotlib Axes
            xs: list of x coordinates
            ys: list of y coordinates
            fmt: format string for y values
            dx: x offset in points
            dy: y offset in points
            fontsize: font size for annotations
        """

        for x, y in zip(xs, ys):
            if y is None:
                continue
            ax.annotate(
                fmt.format(y),
                (x, y),
                textcoords="offset points",
                xytext=(dx, dy),
                ha="center",
                va="center",
                fontsize=fontsize,
            )


def compute_run_stats(report: HarnessReport):
    """
    Returns:
      turns (np.ndarray) guess counts present, ascending
      games (np.ndarray) number of games per guess count
      avg_turns (float), min_turns (int), max_turns (int)
    """
    guesses = np.asarray(report.guesses, dtype=np.int64)
    if guesses.size == 0:
        return np.array([]), np.array([]), np.nan, 0, 0

    turns, games = np.unique(guesses, return_counts=True)
    return (
        turns,
        games,
        float(np.mean(guesses)),
        int(np.min(guesses)),
        int(np.max(guesses)),
    )


def plot_guess_distribution(report: HarnessReport, out_path, title=None):
    """
    Bar chart of how many games needed each number of guesses.

    Args:
        report: HarnessReport from run_harness
        out_path: PNG file to write
        title: optional plot title
    """
    turns, games, avg_turns, min_turns, max_turns = compute_run_stats(report)
    rules = report.max_code.rules

    plt.rcParams["lines.solid_capstyle"] = "round"
    plt.rcParams["lines.linewidth"] = 1.0

    fig = plt.figure(figsize=(10, 6))
    ax = plt.gca()
    ax.bar(turns, games, width=0.6, alpha=0.8, label="Games")
    _annotate_points(ax, turns, games, fmt="{:d}", dy=8)
    ax.axvline(avg_turns, linestyle="--", color="gray", label=f"Average {avg_turns:.3f}")

    # Titles and labels
    plt.title(
        title
        or f"Guesses per game for {rules['code_length']} pegs, "
        f"{rules['num_colors']} colors\n"
        f"{report.count} games, min {min_turns}, max {max_turns}"
    )
    plt.xlabel("Number of Guesses")
    plt.ylabel("Number of Games")
    plt.xticks(turns)
    plt.grid(True, axis="y")
    plt.legend()

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=200, bbox_inches="tight")
    plt.close(fig)
    return out_path


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--pegs", type=int, default=4, help="Code length")
    ap.add_argument("--colors", type=int, default=6, help="Palette size")
    ap.add_argument("--outdir", default="./results", help="Output directory for PNGs")
    args = ap.parse_args()

    rules = make_rules(args.pegs, args.colors)
    report = run_harness(rules, progress=True)

    out = Path(args.outdir) / f"{args.pegs}pegs_{args.colors}colors_guesses.png"
    plot_guess_distribution(report, out)
    print(f"Plot written to {out}")


if __name__ == "__main__":
    main()
