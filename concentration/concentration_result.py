"""Final outcome of a Concentration session."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Self

from .concentration_state import Owner


class TerminationReason(str, Enum):
    """Why a session stopped."""

    ALL_PAIRS_MATCHED = "all_pairs_matched"
    MAX_FLIPS = "max_flips"
    ILLEGAL_MOVE_FORFEIT = "illegal_move_forfeit"
    AGENT_EXCEPTION = "agent_exception"


@dataclass(frozen=True)
class GameOutcome:
    """Structured result delivered to finish listeners and returned by the runner."""

    game_id: str
    seed: int | None
    winner: Owner | None
    termination_reason: TerminationReason
    pairs_by_owner: dict[Owner, int] = field(default_factory=dict)
    turns_taken: int = 0
    flips: int = 0
    details: str | None = None
    final_state_digest: str | None = None
    event_count: int = 0
    log_path: str | None = None

    def result_for(self, owner: Owner) -> str:
        """Return "win", "lose" or "draw" from `owner`'s point of view."""
        if self.winner is None:
            return "draw"
        return "win" if self.winner is owner else "lose"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable result object."""
        return {
            "game_id": self.game_id,
            "seed": self.seed,
            "winner": self.winner.value if self.winner is not None else None,
            "termination_reason": self.termination_reason.value,
            "pairs_by_owner": {owner.value: count for owner, count in self.pairs_by_owner.items()},
            "turns_taken": self.turns_taken,
            "flips": self.flips,
            "details": self.details,
            "final_state_digest": self.final_state_digest,
            "event_count": self.event_count,
            "log_path": self.log_path,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Self:
        """Build an outcome from serialized data."""
        winner = data.get("winner")
        seed = data.get("seed")
        return cls(
            game_id=str(data["game_id"]),
            seed=int(seed) if seed is not None else None,
            winner=Owner(winner) if winner is not None else None,
            termination_reason=TerminationReason(str(data["termination_reason"])),
            pairs_by_owner={Owner(key): int(value) for key, value in dict(data.get("pairs_by_owner", {})).items()},
            turns_taken=int(data.get("turns_taken", 0)),
            flips=int(data.get("flips", 0)),
            details=data.get("details"),
            final_state_digest=data.get("final_state_digest"),
            event_count=int(data.get("event_count", 0)),
            log_path=data.get("log_path"),
        )
