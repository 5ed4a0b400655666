"""Owners, phases and the read-only session snapshot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from framework.state import State

from .concentration_board import CardState


class Owner(str, Enum):
    """Seat holding the turn."""

    PLAYER = "player"
    AI = "ai"

    @property
    def opponent(self) -> "Owner":
        return Owner.AI if self is Owner.PLAYER else Owner.PLAYER


class Phase(str, Enum):
    """Turn engine states."""

    AWAITING_FIRST_FLIP = "awaiting_first_flip"
    AWAITING_SECOND_FLIP = "awaiting_second_flip"
    RESOLVING = "resolving"
    FINISHED = "finished"


def parse_owner(raw: Owner | str) -> Owner:
    """Accept an `Owner` or its case-insensitive string value."""
    if isinstance(raw, Owner):
        return raw
    try:
        return Owner(str(raw).strip().lower())
    except ValueError as exc:
        raise ValueError(f"Invalid owner: {raw!r}") from exc


@dataclass(frozen=True)
class CardView:
    """Public view of one card; `value` is None while the card is face down."""

    index: int
    value: int | None
    state: CardState


@dataclass(frozen=True)
class SessionSnapshot(State):
    """Immutable view handed to the presentation layer."""

    game_id: str
    rows: int
    cols: int
    cards: tuple[CardView, ...]
    pairs_by_owner: dict[Owner, int]
    turns_taken: int
    current_owner: Owner
    phase: Phase
    pending_index: int | None = None
    winner: Owner | None = None

    def hidden_indices(self) -> list[int]:
        return [card.index for card in self.cards if card.state is CardState.HIDDEN]

    def revealed_indices(self) -> list[int]:
        return [card.index for card in self.cards if card.state is CardState.REVEALED]

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED
