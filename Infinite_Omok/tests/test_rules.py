"""Win and draw detection on the unbounded grid."""

import pytest

from Infinite_Omok.Board import Board, Stone
from Infinite_Omok.engine import rules
from Infinite_Omok.engine.state import GameState, GameStatus, Move


def _place_all(board, coords, side):
    for coord in coords:
        board.place(coord, side)


def test_four_plus_adjacent_stone_wins():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0), (3, 0)], Stone.BLACK)
    assert b.is_empty((4, 0)) and b.is_empty((-1, 0))
    b.place((4, 0), Stone.BLACK)
    assert rules.check_win(b, Move((4, 0), Stone.BLACK)) == Stone.BLACK


def test_non_adjacent_fifth_stone_does_not_win():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0), (3, 0)], Stone.BLACK)
    b.place((5, 0), Stone.BLACK)
    assert rules.check_win(b, Move((5, 0), Stone.BLACK)) is None


@pytest.mark.parametrize("offset", [(0, 0), (17, -3), (-1000, 7), (10 ** 9, -10 ** 9)])
@pytest.mark.parametrize("direction", [(1, 0), (0, 1), (1, 1), (1, -1)])
def test_win_is_translation_invariant(offset, direction):
    b = Board()
    ox, oy = offset
    dx, dy = direction
    # Play the middle stone last so both arms are counted
    order = [0, 1, 3, 4, 2]
    for i, step in enumerate(order):
        coord = (ox + dx * step, oy + dy * step)
        b.place(coord, Stone.WHITE)
        winner = rules.check_win(b, Move(coord, Stone.WHITE))
        if i < 4:
            assert winner is None
        else:
            assert winner == Stone.WHITE


def test_blocked_four_is_not_a_win():
    b = Board()
    _place_all(b, [(-1, 0), (4, 0)], Stone.WHITE)
    _place_all(b, [(0, 0), (1, 0), (2, 0), (3, 0)], Stone.BLACK)
    assert rules.check_win(b, Move((3, 0), Stone.BLACK)) is None


def test_overline_wins_by_default_but_not_under_exact_five():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0), (4, 0), (5, 0)], Stone.BLACK)
    b.place((3, 0), Stone.BLACK)
    last = Move((3, 0), Stone.BLACK)
    assert rules.check_win(b, last) == Stone.BLACK
    assert rules.check_win(b, last, overline_wins=False) is None


def test_exact_five_wins_under_exact_five():
    b = Board()
    _place_all(b, [(0, 0), (0, 1), (0, 2), (0, 3), (0, 4)], Stone.WHITE)
    assert rules.check_win(b, Move((0, 2), Stone.WHITE), overline_wins=False) == Stone.WHITE


def test_check_win_ignores_mismatched_side():
    b = Board()
    _place_all(b, [(x, 0) for x in range(5)], Stone.BLACK)
    assert rules.check_win(b, Move((4, 0), Stone.WHITE)) is None


def test_is_win_after_move_on_diagonal():
    b = Board()
    _place_all(b, [(i, -i) for i in range(5)], Stone.BLACK)
    assert rules.is_win_after_move(b, (2, -2), Stone.BLACK)
    assert not rules.is_win_after_move(b, (2, -2), Stone.WHITE)


def test_draw_only_at_move_limit_without_winner():
    b = Board()
    state = GameState()
    _place_all(b, [(0, 0), (5, 5), (9, 0), (0, 9)], Stone.BLACK)
    assert rules.is_draw(b, state, move_limit=4)
    assert not rules.is_draw(b, state, move_limit=5)
    assert not rules.is_draw(b, state, move_limit=None)
    state.status = GameStatus.won(Stone.BLACK)
    assert not rules.is_draw(b, state, move_limit=4)


def test_long_run_is_scanned_with_a_cap():
    b = Board()
    _place_all(b, [(x, 3) for x in range(-6, 7)], Stone.WHITE)
    last = Move((0, 3), Stone.WHITE)
    # Arms are capped at five cells each, so the scan sees 11 of the 13 stones
    assert b.run_length((0, 3), 1, 0, cap=rules.WIN_LENGTH) == 11
    assert rules.check_win(b, last) == Stone.WHITE
    assert rules.check_win(b, last, overline_wins=False) is None
