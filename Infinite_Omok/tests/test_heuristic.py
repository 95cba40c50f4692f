"""Run-based evaluation: weights, perspective, run counting and incremental updates."""

import pytest

from Infinite_Omok.Board import Board, Stone
from Infinite_Omok.ai import heuristic


def _place_all(board, coords, side):
    for coord in coords:
        board.place(coord, side)


def test_empty_board_scores_zero():
    assert heuristic.score_board(Board(), Stone.BLACK) == 0


def test_open_three_counted_once():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0)], Stone.BLACK)
    runs = heuristic.DEFAULT_WEIGHTS["runs"]
    # One open three horizontally, plus nine open singles on the other lines
    expected = runs[(3, 2)] + 9 * runs[(1, 2)]
    assert heuristic.score_board(b, Stone.BLACK) == expected


def test_score_is_own_minus_opponent():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 1)], Stone.BLACK)
    _place_all(b, [(0, 1), (5, 5)], Stone.WHITE)
    assert heuristic.score_board(b, Stone.BLACK) == -heuristic.score_board(b, Stone.WHITE)


def test_open_three_to_open_four_strictly_improves():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0)], Stone.BLACK)
    _place_all(b, [(0, 2), (1, 3), (-3, -3)], Stone.WHITE)
    before = heuristic.score_board(b, Stone.BLACK)
    b.place((3, 0), Stone.BLACK)
    after = heuristic.score_board(b, Stone.BLACK)
    assert after > before


def test_threat_ordering():
    value = heuristic.run_value
    assert value(5, 0) > value(4, 2) > value(4, 1) > value(3, 2) > value(3, 1) > value(2, 2)
    assert value(4, 2) >= 10 * value(4, 1)
    assert value(6, 0) == heuristic.DEFAULT_WEIGHTS["five"]
    assert value(4, 0) == 0


def test_blocking_an_opponent_four_improves_defender_score():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0), (3, 0)], Stone.BLACK)
    b.place((-1, 0), Stone.WHITE)
    before = heuristic.score_board(b, Stone.WHITE)
    b.place((4, 0), Stone.WHITE)
    assert heuristic.score_board(b, Stone.WHITE) > before


def test_incremental_matches_full():
    b = Board()
    eval_color = Stone.BLACK
    score = heuristic.score_board(b, eval_color)
    moves = [
        ((0, 0), Stone.BLACK),
        ((1, 1), Stone.WHITE),
        ((2, 0), Stone.BLACK),   # gap at (1, 0)
        ((1, 0), Stone.BLACK),   # closes the gap, merging runs
        ((3, 0), Stone.WHITE),   # blocks one end
        ((-1, 0), Stone.WHITE),  # blocks the other end
        ((1, -1), Stone.BLACK),
        ((-2, 2), Stone.WHITE),
        ((0, 2), Stone.WHITE),
        ((-1, 3), Stone.WHITE),
    ]
    for coord, side in moves:
        b.place(coord, side)
        score = heuristic.update_score_after_move(b, coord, eval_color, score)
        assert score == heuristic.score_board(b, eval_color)


def test_score_point_prefers_completing_five():
    b = Board()
    _place_all(b, [(0, 0), (1, 0), (2, 0), (3, 0)], Stone.BLACK)
    win_point = heuristic.score_point(b, (4, 0), Stone.BLACK)
    quiet_point = heuristic.score_point(b, (1, 2), Stone.BLACK)
    assert win_point >= heuristic.ATTACK_FIVE
    assert win_point > quiet_point
    # Defending the same cell is also urgent for the opponent
    assert heuristic.score_point(b, (4, 0), Stone.WHITE) >= heuristic.DEFENSE_FIVE
    assert heuristic.score_point(b, (0, 0), Stone.WHITE) == heuristic.OCCUPIED_POINT_SCORE


def test_packaged_weights_match_defaults():
    assert heuristic.load_weights("config/weights.yaml") == heuristic.DEFAULT_WEIGHTS


def test_missing_weights_file_falls_back(tmp_path):
    assert heuristic.load_weights(tmp_path / "nope.yaml") is heuristic.DEFAULT_WEIGHTS


def test_custom_weights_loaded(tmp_path):
    path = tmp_path / "weights.yaml"
    path.write_text(
        "five: 777\n"
        "runs:\n"
        "  - {length: 3, open_ends: 2, score: 30}\n"
        "  - {length: 2}\n",
        encoding="utf-8",
    )
    weights = heuristic.load_weights(path)
    assert weights == {"five": 777, "runs": {(3, 2): 30}}
    assert heuristic.run_value(3, 2, weights) == 30
    assert heuristic.run_value(2, 2, weights) == 0


@pytest.mark.parametrize("side", [Stone.BLACK, Stone.WHITE])
def test_score_only_depends_on_relative_position(side):
    shape_black = [(0, 0), (1, 1), (2, 2)]
    shape_white = [(1, 0), (3, 3)]
    scores = []
    for ox, oy in [(0, 0), (500, -900)]:
        b = Board()
        _place_all(b, [(x + ox, y + oy) for x, y in shape_black], Stone.BLACK)
        _place_all(b, [(x + ox, y + oy) for x, y in shape_white], Stone.WHITE)
        scores.append(heuristic.score_board(b, side))
    assert scores[0] == scores[1]
