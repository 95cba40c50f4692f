"""Game session: turn order, rule checks after each placement, and AI turns."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterable, Optional

from .Board import Board, Coordinate, Stone
from .ai import search_minimax
from .engine import referee, rules
from .engine.errors import InternalInvariantError, NotYourTurnError, SearchCancelledError
from .engine.state import GameState, GameStatus, Move, StatusKind
from .settings import GameConfig

LOGGER = logging.getLogger(__name__)


class SessionState(Enum):
    AWAITING_HUMAN_MOVE = "awaiting_human_move"
    AWAITING_AI_MOVE = "awaiting_ai_move"
    WON = "won"
    DRAW = "draw"


class GameSession:
    """
    Owns the board and the game state for one game. Black always moves first;
    each colour is controlled either by a human caller or by the search.
    """

    def __init__(self, config: GameConfig | None = None, weights=None):
        self.config = config or GameConfig()
        self.weights = weights
        self._ai_sides = set() if self.config.ai_side is None else {Stone(self.config.ai_side)}
        self._epoch = 0
        self.stats: list[dict] = []
        self._reset()

    def _reset(self):
        self.board = Board()
        self.game_state = GameState()

    @property
    def state(self) -> SessionState:
        status = self.game_state.status
        if status.kind is StatusKind.WON:
            return SessionState.WON
        if status.kind is StatusKind.DRAW:
            return SessionState.DRAW
        if self.is_ai_turn():
            return SessionState.AWAITING_AI_MOVE
        return SessionState.AWAITING_HUMAN_MOVE

    @property
    def side_to_move(self) -> Stone:
        return self.game_state.side_to_move

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self.game_state.moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self.game_state.last_move

    @property
    def ai_sides(self) -> frozenset:
        return frozenset(self._ai_sides)

    def is_ai(self, side: Stone) -> bool:
        return side in self._ai_sides

    def is_ai_turn(self) -> bool:
        return not self.game_state.status.is_terminal and self.is_ai(self.side_to_move)

    def query_stone(self, coord: Coordinate) -> Stone:
        return self.board.get(coord)

    def game_status(self) -> GameStatus:
        return self.game_state.status

    def place_human_move(self, coord: Coordinate) -> GameStatus:
        """Apply a human placement; raises GameOverError/NotYourTurnError/OccupiedError."""
        coord = referee.check_move(
            coord, self.board, self.game_state, expected_mover=not self.is_ai(self.side_to_move)
        )
        return self._apply(coord)

    def request_ai_move(self) -> Coordinate:
        """Run the search for the AI side to move, apply its move and return it."""
        referee.check_turn(self.game_state)
        if not self.is_ai(self.side_to_move):
            raise NotYourTurnError(f"{self.side_to_move.label} is not controlled by the AI")

        epoch = self._epoch
        side = self.side_to_move
        coord = search_minimax.choose_move(
            self.board, side, self.config.search_config(), weights=self.weights, stats=self.stats
        )
        if epoch != self._epoch:
            LOGGER.info("Discarding stale search result %s after restart", coord)
            raise SearchCancelledError("Session changed while the search was running")
        if not self.board.is_empty(coord):
            raise InternalInvariantError(f"Search returned occupied cell {coord}")
        self._apply(coord)
        return coord

    def restart(self) -> "GameSession":
        """Discard the game (and any in-flight search result) and return to the initial state."""
        self._epoch += 1
        self._reset()
        LOGGER.debug("Session restarted")
        return self

    def undo(self, count: int = 1) -> GameStatus:
        """Drop the last `count` moves and rebuild the board from the remaining history."""
        moves = self.game_state.moves
        if count < 1 or count > len(moves):
            raise ValueError(f"Cannot undo {count} move(s) with {len(moves)} in history")
        kept = moves[:-count]
        self._epoch += 1
        self._reset()
        for move in kept:
            self._apply(move.coord)
        return self.game_state.status

    def set_controller(self, side: Stone, ai: bool):
        """Switch a colour between human and AI control."""
        side = Stone(side)
        if side == Stone.EMPTY:
            raise ValueError("side must be BLACK or WHITE")
        if ai:
            self._ai_sides.add(side)
        else:
            self._ai_sides.discard(side)
        self._epoch += 1

    def _apply(self, coord: Coordinate) -> GameStatus:
        state = self.game_state
        side = state.side_to_move
        self.board.place(coord, side)
        move = Move(coord, side)
        state.moves.append(move)
        LOGGER.debug("Move %d: %s %s", state.move_count, side.label, coord)

        winner = rules.check_win(self.board, move, overline_wins=self.config.overline_wins)
        if winner is not None:
            state.status = GameStatus.won(winner)
        elif rules.is_draw(self.board, state, self.config.draw_move_limit):
            state.status = GameStatus.draw()
        else:
            state.side_to_move = side.opponent
        return state.status


def new_game(config: GameConfig | None = None, weights=None, ai_sides: Iterable[Stone] | None = None) -> GameSession:
    session = GameSession(config, weights=weights)
    if ai_sides is not None:
        for side in (Stone.BLACK, Stone.WHITE):
            session.set_controller(side, side in set(ai_sides))
    return session
