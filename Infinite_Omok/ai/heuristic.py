"""Run-based position evaluation (open/closed fours, threes, twos) over existing stones only."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import yaml

from Infinite_Omok.Board import LINES, Board, Coordinate, Stone

LOGGER = logging.getLogger(__name__)

# (run length, open ends) -> score. Runs with no open end are dead and score nothing.
DEFAULT_WEIGHTS = {
    "five": 1_000_000,
    "runs": {
        (4, 2): 100_000,  # open four
        (4, 1): 10_000,   # closed four
        (3, 2): 5_000,    # open three
        (3, 1): 500,      # closed three
        (2, 2): 200,      # open two
        (2, 1): 20,       # closed two
        (1, 2): 4,
        (1, 1): 1,
    },
}

# Single-cell move ordering tables: value of extending own line vs. sitting on the opponent's.
ATTACK_WEIGHTS = {
    (4, 2): 50_000,
    (4, 1): 20_000,
    (3, 2): 10_000,
    (3, 1): 1_000,
    (2, 2): 500,
    (2, 1): 100,
    (1, 2): 50,
}
ATTACK_FIVE = 1_000_000
ATTACK_DEFAULT = 10

DEFENSE_WEIGHTS = {
    (4, 2): 40_000,
    (4, 1): 15_000,
    (3, 2): 8_000,
    (3, 1): 800,
}
DEFENSE_FIVE = 900_000

OCCUPIED_POINT_SCORE = -(10 ** 9)


def load_weights(path="config/weights.yaml"):
    """Load the run weight table from YAML; fall back to defaults on error/missing."""
    path = Path(path)
    if not path.is_absolute() and not path.exists():
        candidate = Path(__file__).resolve().parents[1] / path
        if candidate.exists():
            path = candidate

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        LOGGER.debug("No weight file at %s; using defaults", path)
        return DEFAULT_WEIGHTS

    runs = {}
    for item in data.get("runs", []):
        length = item.get("length")
        open_ends = item.get("open_ends")
        if length is None or open_ends is None:
            continue
        runs[(int(length), int(open_ends))] = int(item.get("score", 0))
    if not runs:
        return DEFAULT_WEIGHTS
    return {"five": int(data.get("five", DEFAULT_WEIGHTS["five"])), "runs": runs}


def run_value(length: int, open_ends: int, weights=None) -> int:
    weights = weights or DEFAULT_WEIGHTS
    if length >= 5:
        return weights["five"]
    if open_ends == 0:
        return 0
    return weights["runs"].get((length, open_ends), 0)


def score_board(board: Board, side: Stone, weights=None) -> int:
    """
    Evaluate the position from `side`'s perspective (own runs minus opponent runs).
    Cost scales with stones x 4 lines; every run is counted once, from its start cell.
    """
    weights = weights or DEFAULT_WEIGHTS
    total = 0
    for (x, y), stone in board.stones():
        for dx, dy in LINES:
            if board.get((x - dx, y - dy)) == stone:
                continue
            length, open_ends = _run_at(board, x, y, dx, dy, stone)
            value = run_value(length, open_ends, weights)
            total += value if stone == side else -value
    return total


def update_score_after_move(board: Board, coord: Coordinate, eval_side: Stone, prev_score: int, weights=None) -> int:
    """
    Incrementally update an evaluation after a stone was placed at coord.
    board is assumed to already contain the stone; only the four lines through
    coord are rescored, with coord treated as empty for the "before" view.
    """
    weights = weights or DEFAULT_WEIGHTS
    x, y = coord
    delta = 0
    for dx, dy in LINES:
        after = _segment_score(board, x, y, dx, dy, eval_side, weights)
        before = _segment_score(board, x, y, dx, dy, eval_side, weights, skip=coord)
        delta += after - before
    return prev_score + delta


def score_point(board: Board, coord: Coordinate, side: Stone) -> int:
    """Single-cell attack/defence score for playing `side` at an empty coord."""
    if not board.is_empty(coord):
        return OCCUPIED_POINT_SCORE
    opp = side.opponent
    total = 0
    for dx, dy in LINES:
        length, open_ends = _line_if_played(board, coord, dx, dy, side)
        if length >= 5:
            total += ATTACK_FIVE
        else:
            total += ATTACK_WEIGHTS.get((length, open_ends), ATTACK_DEFAULT)

        length, open_ends = _line_if_played(board, coord, dx, dy, opp)
        if length >= 5:
            total += DEFENSE_FIVE
        else:
            total += DEFENSE_WEIGHTS.get((length, open_ends), 0)
    return total


def _cell(board: Board, x: int, y: int, skip: Optional[Coordinate]) -> Stone:
    if skip is not None and (x, y) == skip:
        return Stone.EMPTY
    return board.get((x, y))


def _run_at(board, x, y, dx, dy, stone, skip=None):
    """Length and open ends of the run of `stone` starting at (x, y) heading (dx, dy)."""
    length = 0
    cx, cy = x, y
    while _cell(board, cx, cy, skip) == stone:
        length += 1
        cx += dx
        cy += dy
    open_ends = 0
    if _cell(board, cx, cy, skip) == Stone.EMPTY:
        open_ends += 1
    if _cell(board, x - dx, y - dy, skip) == Stone.EMPTY:
        open_ends += 1
    return length, open_ends


def _segment_score(board, x, y, dx, dy, eval_side, weights, skip=None):
    """Score every run in the contiguous occupied stretch through (x, y) along one line."""
    sx, sy = x, y
    while _cell(board, sx - dx, sy - dy, skip) != Stone.EMPTY:
        sx -= dx
        sy -= dy

    total = 0
    cx, cy = sx, sy
    while True:
        stone = _cell(board, cx, cy, skip)
        if stone == Stone.EMPTY:
            if (cx, cy) != (x, y):
                break
        elif _cell(board, cx - dx, cy - dy, skip) != stone:
            length, open_ends = _run_at(board, cx, cy, dx, dy, stone, skip)
            value = run_value(length, open_ends, weights)
            total += value if stone == eval_side else -value
        cx += dx
        cy += dy
    return total


def _line_if_played(board, coord, dx, dy, side):
    """Run length and open ends through an empty coord if `side` played there."""
    forward = board.count_direction(coord, dx, dy, side)
    backward = board.count_direction(coord, -dx, -dy, side)
    x, y = coord
    open_ends = 0
    if board.is_empty((x + dx * (forward + 1), y + dy * (forward + 1))):
        open_ends += 1
    if board.is_empty((x - dx * (backward + 1), y - dy * (backward + 1))):
        open_ends += 1
    return 1 + forward + backward, open_ends
