"""Candidate move generation (neighbourhood of existing stones, ranked top-N)."""

from __future__ import annotations

from Infinite_Omok.Board import ORIGIN, Board, Coordinate, Stone

from . import heuristic


NEIGHBORS_8 = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

ADJACENCY_BONUS = 2


def _distance_ok(dx: int, dy: int, radius: int, metric: str) -> bool:
    """Return True if (dx, dy) falls within the chosen radius metric."""
    if metric == "manhattan":
        return abs(dx) + abs(dy) <= radius
    if metric == "chebyshev":
        return max(abs(dx), abs(dy)) <= radius
    raise ValueError(f"Unknown distance metric: {metric}")


def candidates(board: Board, radius: int = 2, metric: str = "chebyshev") -> set[Coordinate]:
    """
    All empty cells within `radius` of any stone. An empty board yields the origin only,
    so the search space stays finite on the unbounded grid.
    """
    if board.move_count == 0:
        return {ORIGIN}

    offsets = [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if (dx or dy) and _distance_ok(dx, dy, radius, metric)
    ]
    result = set()
    for (ox, oy), _ in board.stones():
        for dx, dy in offsets:
            cell = (ox + dx, oy + dy)
            if board.is_empty(cell):
                result.add(cell)
    return result


def generate_candidates(
    board: Board,
    side: Stone,
    radius: int = 2,
    limit: int | None = None,
    *,
    metric: str = "chebyshev",
    pool: set[Coordinate] | None = None,
) -> list[Coordinate]:
    """
    Candidates ranked for move ordering: point score (attack + defence) plus a bonus
    per adjacent stone. Ties fall back to coordinate order, so ranking is deterministic.
    """
    pool = candidates(board, radius, metric) if pool is None else pool
    scored = []
    for cell in pool:
        x, y = cell
        adj_count = sum(1 for dx, dy in NEIGHBORS_8 if not board.is_empty((x + dx, y + dy)))
        score = heuristic.score_point(board, cell, side) + adj_count * ADJACENCY_BONUS
        scored.append((-score, cell))
    scored.sort()
    ranked = [cell for _, cell in scored]
    return ranked if limit is None else ranked[:limit]
