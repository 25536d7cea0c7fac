"""Round engine and state management."""

from core.game.events import GameEvent, EventEmitter, EventType
from core.game.state import RoundState
from core.game.engine import RoundResult, TwentyOneGame

__all__ = [
    "GameEvent",
    "EventEmitter",
    "EventType",
    "RoundState",
    "RoundResult",
    "TwentyOneGame",
]
