"""Move validation for a live game: terminal state, turn order and occupancy."""

from Infinite_Omok.Board import Board, Coordinate
from .errors import GameOverError, NotYourTurnError, OccupiedError
from .state import GameState


def normalize_coord(move) -> Coordinate:
    """Coerce a move into an (int, int) coordinate; raise ValueError if malformed."""
    try:
        x, y = move
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Move must be an (x, y) pair, got {move!r}") from exc
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        raise ValueError(f"Move coordinates must be integers, got {move!r}")
    return (x, y)


def check_turn(state: GameState, expected_mover: bool = True):
    """Raise GameOverError after a win/draw, NotYourTurnError for the wrong mover."""
    if state.status.is_terminal:
        raise GameOverError(f"Game is over ({state.status.describe()})")
    if not expected_mover:
        raise NotYourTurnError(f"It is not this player's turn ({state.side_to_move.label} to move)")


def check_move(move, board: Board, state: GameState, expected_mover: bool = True) -> Coordinate:
    """
    Validate a move against game status, turn order and occupancy.
    Raises GameOverError, NotYourTurnError, OccupiedError or ValueError.
    """
    check_turn(state, expected_mover)
    coord = normalize_coord(move)
    if not board.is_empty(coord):
        raise OccupiedError(f"Cell {coord} already occupied")
    return coord
