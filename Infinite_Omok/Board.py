"""Sparse stone storage for an unbounded grid, with occupied-region tracking."""

from __future__ import annotations

from enum import IntEnum
from typing import Iterator, Optional, Tuple

from .engine.errors import OccupiedError

Coordinate = Tuple[int, int]
Bounds = Tuple[int, int, int, int]

ORIGIN: Coordinate = (0, 0)

# Horizontal, vertical, diagonal, anti-diagonal
LINES = ((1, 0), (0, 1), (1, 1), (1, -1))


class Stone(IntEnum):
    # -1 (black), 0 (empty), 1 (white); negation gives the opponent
    EMPTY = 0
    BLACK = -1
    WHITE = 1

    @property
    def opponent(self) -> "Stone":
        return Stone(-self.value)

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Board:
    def __init__(self):
        self.cells: dict[Coordinate, Stone] = {}
        self.move_count = 0
        self.history: list[Coordinate] = []
        self._bounds: Optional[Bounds] = None
        self._bounds_stack: list[Optional[Bounds]] = []

    def get(self, coord: Coordinate) -> Stone:
        return self.cells.get(coord, Stone.EMPTY)

    def is_empty(self, coord: Coordinate) -> bool:
        return coord not in self.cells

    def place(self, coord: Coordinate, stone: Stone):
        """Place a stone; raise if the stone is EMPTY or the cell is occupied."""
        stone = Stone(stone)
        if stone == Stone.EMPTY:
            raise ValueError("stone must be BLACK or WHITE")
        if coord in self.cells:
            raise OccupiedError(f"cell {coord} already occupied")
        self._store(coord, stone)
        self.history.append(coord)

    def stones(self) -> Iterator[tuple[Coordinate, Stone]]:
        return iter(self.cells.items())

    def occupied_bounds(self) -> Optional[Bounds]:
        """Return (min_x, min_y, max_x, max_y) of placed stones, or None if empty."""
        return self._bounds

    def search_window(self, margin: int = 2) -> Optional[Bounds]:
        if self._bounds is None:
            return None
        min_x, min_y, max_x, max_y = self._bounds
        return (min_x - margin, min_y - margin, max_x + margin, max_y + margin)

    def clone(self) -> "Board":
        new_board = Board()
        new_board.cells = dict(self.cells)
        new_board.move_count = self.move_count
        new_board.history = self.history[:]
        new_board._bounds = self._bounds
        return new_board

    def count_direction(self, coord: Coordinate, dx: int, dy: int, stone: Stone, cap: Optional[int] = None) -> int:
        """Count contiguous `stone` cells from coord (exclusive) along (dx, dy), stopping at cap."""
        count = 0
        cx, cy = coord[0] + dx, coord[1] + dy
        while self.cells.get((cx, cy)) == stone:
            count += 1
            if cap is not None and count >= cap:
                break
            cx += dx
            cy += dy
        return count

    def run_length(self, coord: Coordinate, dx: int, dy: int, cap: Optional[int] = None) -> int:
        """Length of the run through an occupied coord along one line (0 if empty)."""
        stone = self.get(coord)
        if stone == Stone.EMPTY:
            return 0
        forward = self.count_direction(coord, dx, dy, stone, cap)
        backward = self.count_direction(coord, -dx, -dy, stone, cap)
        return 1 + forward + backward

    # Scratch operations for search on a cloned board; not used during play.
    def _push_stone(self, coord: Coordinate, stone: Stone):
        self._bounds_stack.append(self._bounds)
        self._store(coord, stone)

    def _pop_stone(self, coord: Coordinate):
        del self.cells[coord]
        self.move_count -= 1
        self._bounds = self._bounds_stack.pop()

    def _store(self, coord: Coordinate, stone: Stone):
        x, y = coord
        self.cells[coord] = stone
        self.move_count += 1
        if self._bounds is None:
            self._bounds = (x, y, x, y)
        else:
            min_x, min_y, max_x, max_y = self._bounds
            self._bounds = (min(min_x, x), min(min_y, y), max(max_x, x), max(max_y, y))
