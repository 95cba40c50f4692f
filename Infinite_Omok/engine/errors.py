"""Exceptions raised by the board, referee, search and game session."""


class EngineError(Exception):
    """Base class for all engine errors."""


class OccupiedError(EngineError, ValueError):
    """Placement on a cell that already holds a stone."""


class NotYourTurnError(EngineError):
    """Placement attempted by the side that is not expected to move."""


class GameOverError(EngineError):
    """Placement attempted after the game has been won or drawn."""


class InternalInvariantError(EngineError, RuntimeError):
    """A core invariant was violated; indicates a defect, not a caller mistake."""


class SearchCancelledError(EngineError):
    """The session was restarted or rewound while a search was in flight."""
