"""Shared building blocks: errors, events, moves, agents and state helpers.

`framework.runner` and `framework.arena` drive Concentration sessions and are
imported from their modules directly.
"""

from .errors import (
    GameError,
    GameOverError,
    IllegalStateError,
    InvalidDimensionsError,
    InvalidIndexError,
    NotYourTurnError,
)
from .events import EventType, MatchEvent
from .move import Move
from .player import Agent
from .state import State

__all__ = [
    "Agent",
    "EventType",
    "GameError",
    "GameOverError",
    "IllegalStateError",
    "InvalidDimensionsError",
    "InvalidIndexError",
    "MatchEvent",
    "Move",
    "NotYourTurnError",
    "State",
]
