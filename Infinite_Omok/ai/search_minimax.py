"""Minimax with alpha-beta pruning and deterministic ordering under a node/time budget."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Optional

from Infinite_Omok.Board import Board, Coordinate, Stone
from Infinite_Omok.engine import rules
from Infinite_Omok.engine.errors import InternalInvariantError
from Infinite_Omok.utils import timer

from . import heuristic
from . import move_selector
from . import transposition

LOGGER = logging.getLogger(__name__)

INF = 10 ** 9
TIME_CHECK_MASK = 255  # check the clock every 256 nodes


@dataclass(frozen=True)
class SearchConfig:
    depth: int = 2
    node_budget: Optional[int] = 20_000
    time_budget: Optional[float] = None  # seconds
    radius: int = 2
    candidate_limit: int = 12
    overline_wins: bool = True

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError("search depth must be at least 1")
        if self.radius < 1:
            raise ValueError("candidate radius must be at least 1")
        if self.candidate_limit < 1:
            raise ValueError("candidate_limit must be at least 1")


class MinimaxSearcher:
    """Encapsulates the state and logic for one AI turn's search."""

    def __init__(self, color: Stone, config: SearchConfig, weights=None, stats=None):
        self.color = color
        self.config = config
        self.depth = config.depth
        self.weights = weights or heuristic.DEFAULT_WEIGHTS
        self.stats_list = stats
        self.cache = {}
        self.zobrist_table = transposition.zobrist_init()

        self.node_counter = 0
        self.deadline = None
        self.start_time = None
        self.pv_move = None
        self._root_best = None
        self._completed_depth = 0

    def choose_move(self, board: Board) -> Coordinate:
        """Return the best move for self.color. The given board is never mutated."""
        self.start_time = time.time()
        self.deadline = timer.deadline_after(self.config.time_budget)
        board = board.clone()

        pool = move_selector.candidates(board, self.config.radius)
        if not pool:
            LOGGER.error("Empty candidate set for %s on a board with %d stones", self.color.label, board.move_count)
            raise InternalInvariantError("Candidate generator returned no moves for an ongoing game")
        ordered_pool = sorted(pool)

        # Tactical guardrails: immediate win or block before deeper search.
        best_move = self._find_immediate_win(board, self.color, ordered_pool)
        if best_move is None:
            best_move = self._find_immediate_win(board, self.color.opponent, ordered_pool)
        if best_move is None:
            best_move = self._iterative_deepening(board, pool)

        if not board.is_empty(best_move):
            raise InternalInvariantError(f"Search selected occupied cell {best_move}")
        if self.stats_list is not None:
            self._record_stats()
        LOGGER.debug(
            "%s chose %s (depth %d, %d nodes)", self.color.label, best_move, self._completed_depth, self.node_counter
        )
        return best_move

    def _iterative_deepening(self, board: Board, pool) -> Coordinate:
        root_score = heuristic.score_board(board, self.color, self.weights)
        root_hash = transposition.hash_board(board, self.zobrist_table)
        ranked = move_selector.generate_candidates(board, self.color, pool=pool)

        best_move = None
        for current_depth in range(1, self.depth + 1):
            self._root_best = None
            try:
                _, move = self._minimax(
                    board,
                    self.color,
                    current_depth,
                    -INF - 1,
                    INF + 1,
                    root_score,
                    current_hash=root_hash,
                    root=True,
                )
            except TimeoutError:
                if best_move is None:
                    best_move = self._root_best
                break
            if move is not None:
                best_move = move
                self.pv_move = move  # Principal variation move for next iteration
                self._completed_depth = current_depth

        # Budget ran out before any root move was scored
        if best_move is None:
            best_move = ranked[0]
        return best_move

    def _time_ok(self):
        self.node_counter += 1
        budget = self.config.node_budget
        if budget is not None and self.node_counter > budget:
            raise TimeoutError("Search node budget exhausted")
        if (self.node_counter & TIME_CHECK_MASK) == 0 and timer.expired(self.deadline):
            raise TimeoutError("Search timed out")

    def _find_immediate_win(self, board: Board, color: Stone, ordered_pool) -> Optional[Coordinate]:
        for move in ordered_pool:
            board._push_stone(move, color)
            try:
                if rules.is_win_after_move(board, move, color, self.config.overline_wins):
                    return move
            finally:
                board._pop_stone(move)
        return None

    def _minimax(self, board, node_color, depth, alpha, beta, current_score, current_hash: int, root=False):
        self._time_ok()

        if depth == 0:
            return current_score, None

        # Transposition table lookup
        key = (current_hash, node_color)
        tt_move = None
        cached = transposition.lookup(self.cache, key)
        if cached and not root:
            cached_depth, cached_score, cached_flag, cached_move = cached
            tt_move = cached_move
            if cached_depth >= depth:
                if cached_flag == "EXACT":
                    return cached_score, cached_move
                if cached_flag == "LOWER":
                    alpha = max(alpha, cached_score)
                elif cached_flag == "UPPER":
                    beta = min(beta, cached_score)
                if alpha >= beta:
                    return cached_score, cached_move

        candidates = move_selector.generate_candidates(
            board, node_color, self.config.radius, limit=self.config.candidate_limit
        )
        if not candidates:
            LOGGER.error("No candidates inside search at depth %d", depth)
            raise InternalInvariantError("Candidate generator returned no moves inside search")
        if root and self.pv_move in candidates:
            candidates = [self.pv_move] + [mv for mv in candidates if mv != self.pv_move]
        elif tt_move is not None and board.is_empty(tt_move):
            candidates = [tt_move] + [mv for mv in candidates if mv != tt_move]
            candidates = candidates[: self.config.candidate_limit]

        alpha_orig = alpha
        best_score, best_local_move = self._search_moves(
            board, node_color, depth, alpha, beta, candidates, current_score, current_hash, root
        )

        self._store_cache(key, depth, best_score, alpha_orig, beta, best_local_move)
        return best_score, best_local_move

    def _search_moves(self, board, node_color, depth, alpha, beta, candidates, current_score, current_hash, root):
        maximizing = (node_color == self.color)
        best_score = -INF - 1 if maximizing else INF + 1
        best_local_move = None

        for move in candidates:
            board._push_stone(move, node_color)
            next_hash = current_hash ^ self.zobrist_table.key(move, node_color)
            try:
                win_now = rules.is_win_after_move(board, move, node_color, self.config.overline_wins)
                if win_now:
                    score = (INF - board.move_count) if maximizing else (-INF + board.move_count)
                else:
                    new_score = heuristic.update_score_after_move(
                        board, move, self.color, current_score, self.weights
                    )
                    score, _ = self._minimax(
                        board,
                        node_color.opponent,
                        depth - 1,
                        alpha,
                        beta,
                        new_score,
                        current_hash=next_hash,
                    )
            finally:
                board._pop_stone(move)

            if win_now:
                if root:
                    self._root_best = move
                return score, move

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_local_move = move
                    if root:
                        self._root_best = move
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_local_move = move
                beta = min(beta, best_score)

            if beta <= alpha:
                break

        return best_score, best_local_move

    def _store_cache(self, key, depth, score, alpha_orig, beta, move):
        flag = "EXACT"
        if score <= alpha_orig:
            flag = "UPPER"
        elif score >= beta:
            flag = "LOWER"
        transposition.store(self.cache, key, (depth, score, flag, move))

    def _record_stats(self):
        total_time = max(time.time() - self.start_time, 1e-9)
        self.stats_list.append({
            "side": self.color.label,
            "depth": self._completed_depth,
            "nodes": self.node_counter,
            "time": total_time,
            "nps": self.node_counter / total_time,
        })


def choose_move(board: Board, side: Stone, config: SearchConfig | None = None, weights=None, stats=None) -> Coordinate:
    """Public entry point: run one bounded search for `side` and return its move."""
    searcher = MinimaxSearcher(Stone(side), config or SearchConfig(), weights=weights, stats=stats)
    return searcher.choose_move(board)
