"""Text rendering of the occupied window and parsing of console commands."""

from __future__ import annotations

from .Board import Board, Coordinate, Stone

BLACK_STONE = "●"
WHITE_STONE = "○"
EMPTY_CELL = "·"
GLYPHS = {Stone.BLACK: BLACK_STONE, Stone.WHITE: WHITE_STONE, Stone.EMPTY: EMPTY_CELL}

CELL_WIDTH = 4
# Largest number of columns/rows drawn; wider windows are cut around a focus cell
DEFAULT_VIEW = 21

HELP_TEXT = (
    "Commands: 'x y' to place, 'u [n]' undo, 'r' restart, "
    "'t black|white' toggle AI control, 'q' quit"
)


def _clamp_axis(lo: int, hi: int, focus: int, view: int) -> tuple[int, int]:
    if hi - lo + 1 <= view:
        return lo, hi
    start = focus - view // 2
    return start, start + view - 1


def view_window(board: Board, last_move: Coordinate | None = None, margin: int = 2,
                view: int = DEFAULT_VIEW) -> tuple[int, int, int, int]:
    """
    Window drawn by render_board: the stones plus `margin`, cut to at most
    `view` cells per axis around the last move (or the middle of the stones).
    """
    if view < 1:
        raise ValueError("view must be at least 1")
    window = board.search_window(margin)
    if window is None:
        window = (-margin, -margin, margin, margin)
    min_x, min_y, max_x, max_y = window
    if last_move is not None:
        fx, fy = last_move
    else:
        fx, fy = (min_x + max_x) // 2, (min_y + max_y) // 2
    min_x, max_x = _clamp_axis(min_x, max_x, fx, view)
    min_y, max_y = _clamp_axis(min_y, max_y, fy, view)
    return min_x, min_y, max_x, max_y


def render_board(board: Board, last_move: Coordinate | None = None, margin: int = 2,
                 view: int = DEFAULT_VIEW) -> str:
    """Render the stones plus `margin` empty cells around them; y grows downward."""
    min_x, min_y, max_x, max_y = view_window(board, last_move, margin, view)

    lines = [" " * CELL_WIDTH + "".join(f"{x:>{CELL_WIDTH}}" for x in range(min_x, max_x + 1))]
    for y in range(min_y, max_y + 1):
        row = [f"{y:>{CELL_WIDTH}}"]
        for x in range(min_x, max_x + 1):
            glyph = GLYPHS[board.get((x, y))]
            if last_move == (x, y):
                glyph = f"[{glyph}]"
            row.append(f"{glyph:>{CELL_WIDTH}}")
        lines.append("".join(row))
    return "\n".join(lines)


def parse_side(token: str) -> Stone:
    token = token.strip().lower()
    if token in ("b", "black"):
        return Stone.BLACK
    if token in ("w", "white"):
        return Stone.WHITE
    raise ValueError(f"Unknown side {token!r}; expected black or white")


def parse_command(raw: str):
    """
    Parse one console line into (kind, payload):
    ("move", (x, y)), ("undo", n), ("restart", None), ("toggle", Stone),
    ("help", None) or ("quit", None). Raises ValueError on bad input.
    """
    parts = raw.replace(",", " ").split()
    if not parts:
        raise ValueError("Empty input; type 'h' for help")

    head = parts[0].lower()
    if head in ("q", "quit", "exit"):
        return "quit", None
    if head in ("r", "restart"):
        return "restart", None
    if head in ("h", "help", "?"):
        return "help", None
    if head in ("u", "undo"):
        count = int(parts[1]) if len(parts) > 1 else 1
        return "undo", count
    if head in ("t", "toggle"):
        if len(parts) != 2:
            raise ValueError("Usage: t black|white")
        return "toggle", parse_side(parts[1])

    try:
        x_str, y_str = parts
        return "move", (int(x_str), int(y_str))
    except ValueError as exc:
        raise ValueError("Invalid input format; expected two integers") from exc
