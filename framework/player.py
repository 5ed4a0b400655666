"""Agent interface for seats driven by code rather than by a presentation layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from .events import MatchEvent
from .move import Move


class Agent(ABC):
    """Base interface for scripted or automated players."""

    def __init__(self, agent_id: str):
        self.agent_id = agent_id

    def reset(self, game_id: str, player_id: str, seed: int, config: dict[str, Any] | None) -> None:
        """Reset internal state before a new match."""

    @abstractmethod
    def act(self, observation: Any, legal_moves: Sequence[Move]) -> Move:
        """Return the next move given the public snapshot and the legal moves."""

    def on_illegal_move(self, error: Exception, observation: Any) -> None:
        """Optional callback for rejected-move feedback."""

    def on_game_end(self, result: Any, history: Sequence[MatchEvent]) -> None:
        """Optional callback invoked when the match ends."""
