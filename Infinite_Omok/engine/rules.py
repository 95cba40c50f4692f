"""Five-in-a-row win detection through the last move, and the draw safeguard."""

from __future__ import annotations

from typing import Optional

from Infinite_Omok.Board import LINES, Board, Coordinate, Stone
from .state import GameState, Move

WIN_LENGTH = 5


def is_win_after_move(board: Board, coord: Coordinate, side: Stone, overline_wins: bool = True) -> bool:
    """Assumes the stone is already placed at coord; each arm is scanned at most WIN_LENGTH cells."""
    if board.get(coord) != side:
        return False
    for dx, dy in LINES:
        total = board.run_length(coord, dx, dy, cap=WIN_LENGTH)
        if total == WIN_LENGTH or (overline_wins and total > WIN_LENGTH):
            return True
    return False


def check_win(board: Board, last_move: Move, overline_wins: bool = True) -> Optional[Stone]:
    """Return the mover's side if last_move completed five in a row, else None."""
    if is_win_after_move(board, last_move.coord, last_move.side, overline_wins=overline_wins):
        return last_move.side
    return None


def is_draw(board: Board, state: GameState, move_limit: Optional[int]) -> bool:
    """
    The grid never fills up, so a draw is only declared once the configured
    move limit is reached without a winner.
    """
    if state.status.winner is not None or not move_limit:
        return False
    return board.move_count >= move_limit
