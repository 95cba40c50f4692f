"""Game state containers: moves, status and the move history owned by a session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from Infinite_Omok.Board import Coordinate, Stone


class StatusKind(Enum):
    ONGOING = "ongoing"
    WON = "won"
    DRAW = "draw"


@dataclass(frozen=True)
class Move:
    coord: Coordinate
    side: Stone


@dataclass(frozen=True)
class GameStatus:
    kind: StatusKind = StatusKind.ONGOING
    winner: Optional[Stone] = None

    @classmethod
    def ongoing(cls) -> "GameStatus":
        return cls(StatusKind.ONGOING)

    @classmethod
    def won(cls, side: Stone) -> "GameStatus":
        return cls(StatusKind.WON, side)

    @classmethod
    def draw(cls) -> "GameStatus":
        return cls(StatusKind.DRAW)

    @property
    def is_terminal(self) -> bool:
        return self.kind is not StatusKind.ONGOING

    def describe(self) -> str:
        if self.kind is StatusKind.WON:
            return f"{self.winner.label} wins"
        if self.kind is StatusKind.DRAW:
            return "Draw"
        return "Ongoing"


@dataclass
class GameState:
    moves: list[Move] = field(default_factory=list)
    side_to_move: Stone = Stone.BLACK
    status: GameStatus = field(default_factory=GameStatus.ongoing)

    @property
    def move_count(self) -> int:
        return len(self.moves)

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None
