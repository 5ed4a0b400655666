"""Structured exceptions used across the concentration engine and runner."""

from __future__ import annotations

from typing import Any


class GameError(Exception):
    """Base class for recoverable game-level exceptions."""

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {"type": self.__class__.__name__, "message": str(self)}


class InvalidDimensionsError(GameError):
    """Raised when a board cannot be built from the requested rows and columns."""

    def __init__(self, rows: int, cols: int, reason: str | None = None):
        self.rows = rows
        self.cols = cols
        message = f"Invalid board dimensions {rows}x{cols}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"rows": self.rows, "cols": self.cols})
        return payload


class InvalidIndexError(GameError):
    """Raised when a card index falls outside the board."""

    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"Card index {index} out of range for board of {size} cards")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"index": self.index, "size": self.size})
        return payload


class NotYourTurnError(GameError):
    """Raised when an owner acts while the other owner holds the turn."""

    def __init__(self, owner: Any, current_owner: Any):
        self.owner = owner
        self.current_owner = current_owner
        super().__init__(f"It is not {_label(owner)}'s turn; {_label(current_owner)} is to move")

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"owner": _label(self.owner), "current_owner": _label(self.current_owner)})
        return payload


class IllegalStateError(GameError):
    """Raised when a card or the engine is not in the state an operation requires."""


class GameOverError(GameError):
    """Raised for any move submitted after the game has finished."""

    def __init__(self, message: str = "The game is already finished"):
        super().__init__(message)


class MatchConfigurationError(GameError):
    """Raised when a runner or arena is configured incorrectly."""


class IllegalMoveError(GameError):
    """Raised when an agent keeps proposing moves the session rejects."""

    def __init__(self, player_id: str, move: Any, reason: str | None = None):
        self.player_id = player_id
        self.move = move
        self.reason = reason
        message = f"Illegal move by {player_id}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload.update({"player_id": self.player_id, "move": getattr(self.move, "to_dict", lambda: self.move)()})
        if self.reason is not None:
            payload["reason"] = self.reason
        return payload


class AgentExecutionError(GameError):
    """Raised when an agent fails to produce a move."""

    def __init__(self, player_id: str, message: str):
        self.player_id = player_id
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["player_id"] = self.player_id
        return payload


def _label(owner: Any) -> str:
    return str(getattr(owner, "value", owner))
