"""Infinite_Omok package exports."""

from .Board import Board, Stone, ORIGIN, LINES
from .Omokgame import GameSession, SessionState, new_game
from .settings import GameConfig
from .engine.errors import (
    EngineError,
    GameOverError,
    InternalInvariantError,
    NotYourTurnError,
    OccupiedError,
    SearchCancelledError,
)
from .engine.state import GameStatus, Move, StatusKind

# Subpackages for rule engine, AI search, and helpers
from . import ai, engine, utils

__all__ = [
    "Board",
    "Stone",
    "ORIGIN",
    "LINES",
    "GameSession",
    "SessionState",
    "new_game",
    "GameConfig",
    "EngineError",
    "GameOverError",
    "InternalInvariantError",
    "NotYourTurnError",
    "OccupiedError",
    "SearchCancelledError",
    "GameStatus",
    "Move",
    "StatusKind",
    "ai",
    "engine",
    "utils",
]
