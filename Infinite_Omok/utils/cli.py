"""CLI options for selecting controllers, search budget, and config paths."""

import argparse

MODES = ["human-vs-ai", "ai-vs-human", "human-vs-human", "ai-vs-ai"]


def build_parser():
    parser = argparse.ArgumentParser(description="Infinite Omok: five in a row on an unbounded board")
    parser.add_argument(
        "--mode",
        choices=MODES,
        help="Play mode (who plays black/white); defaults to the settings ai_side. Black always moves first",
    )
    parser.add_argument("--settings", default="config/settings.yaml", help="Path to settings YAML")
    parser.add_argument("--weights", default="config/weights.yaml", help="Path to evaluator weights YAML")
    parser.add_argument("--depth", type=int, help="Search depth in plies")
    parser.add_argument("--node-budget", type=int, help="Maximum search nodes per AI move")
    parser.add_argument("--time-budget", type=float, help="Seconds per AI move")
    parser.add_argument("--radius", type=int, help="Candidate radius around existing stones")
    parser.add_argument("--candidate-limit", type=int, help="Number of candidate moves to expand")
    parser.add_argument("--draw-limit", type=int, help="Declare a draw after this many moves")
    parser.add_argument("--exact-five", action="store_true", help="Runs of six or more do not win")
    parser.add_argument("--margin", type=int, default=2, help="Empty cells shown around the stones")
    parser.add_argument("--view", type=int, default=21, help="Largest number of rows and columns drawn")
    parser.add_argument("--verbose", action="store_true", help="Log search statistics and moves")
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)
