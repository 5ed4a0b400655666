"""Pair and turn counters for one session."""

from __future__ import annotations

from .concentration_state import Owner


class ScoreTracker:
    """Counts matched pairs per owner and settled mismatches."""

    def __init__(self) -> None:
        self.pairs_by_owner: dict[Owner, int] = {Owner.PLAYER: 0, Owner.AI: 0}
        self.turns_taken = 0

    def record_match(self, owner: Owner) -> None:
        self.pairs_by_owner[owner] += 1

    def record_mismatch(self) -> None:
        self.turns_taken += 1

    def leader(self) -> Owner | None:
        """Return the owner with more pairs, or None when tied."""
        player = self.pairs_by_owner[Owner.PLAYER]
        ai = self.pairs_by_owner[Owner.AI]
        if player == ai:
            return None
        return Owner.PLAYER if player > ai else Owner.AI
