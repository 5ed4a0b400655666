"""Turn/flip state machine shared by the human seat and the computer opponent."""

from __future__ import annotations

import random
from typing import Any, Callable

from framework.errors import GameOverError, IllegalStateError, NotYourTurnError
from framework.events import EventType

from .concentration_board import Board, Card
from .concentration_policy import AIDecisionPolicy
from .concentration_recall import AIMemoryModel
from .concentration_score import ScoreTracker
from .concentration_state import Owner, Phase

EventListener = Callable[[EventType, dict[str, Any]], None]


class TurnEngine:
    """Drives flips, pair resolution and turn switching.

    The AI never gets a separate resolution path: its picks are replayed through
    `_flip` exactly like a human request. A mismatch parks the engine in
    RESOLVING until the host calls `resolve_mismatch()` after its own delay.
    """

    def __init__(
        self,
        board: Board,
        score: ScoreTracker,
        memory: AIMemoryModel,
        random_source: random.Random,
        *,
        policy: AIDecisionPolicy | None = None,
        starting_owner: Owner = Owner.PLAYER,
        ai_autoplay: bool = True,
        listener: EventListener | None = None,
        on_finished: Callable[[], None] | None = None,
    ):
        self.board = board
        self.score = score
        self.memory = memory
        self.random_source = random_source
        self.policy = policy or AIDecisionPolicy()
        self.ai_autoplay = ai_autoplay
        self.current_owner = starting_owner
        self.phase = Phase.AWAITING_FIRST_FLIP
        self.pending_first: Card | None = None
        self.pending_second: Card | None = None
        self.flips = 0
        self._listener = listener
        self._on_finished = on_finished

    def start(self) -> None:
        """Let the AI open the game when it holds the first turn."""
        self.advance_ai()

    def flip(self, owner: Owner, index: int) -> None:
        """Flip one card for `owner`, then run any AI turns that follow."""
        self._flip(owner, index)
        self.advance_ai()

    def resolve_mismatch(self) -> None:
        """Settle a revealed mismatch, then let the AI play if the turn passed to it."""
        self.settle_mismatch()
        self.advance_ai()

    def settle_mismatch(self) -> None:
        """Hide both mismatched cards and pass the turn without running the AI."""
        if self.phase is Phase.FINISHED:
            raise GameOverError()
        if self.phase is not Phase.RESOLVING or self.pending_first is None or self.pending_second is None:
            raise IllegalStateError("There is no mismatch waiting to be settled.")

        first, second = self.pending_first, self.pending_second
        self.board.reset_pair(first.index, second.index)
        self.score.record_mismatch()
        previous = self.current_owner
        self.current_owner = previous.opponent
        self._clear_pending()
        self.phase = Phase.AWAITING_FIRST_FLIP
        self._emit(
            EventType.SETTLE,
            {
                "indices": [first.index, second.index],
                "from_owner": previous,
                "to_owner": self.current_owner,
                "turns_taken": self.score.turns_taken,
            },
        )

    def play_ai_turn(self) -> None:
        """Play one AI pair on demand (host-paced mode)."""
        self.check_ai_turn()
        self._play_ai_pair()
        self.advance_ai()

    def check_ai_turn(self) -> None:
        """Raise unless the AI may start a pair right now."""
        if self.phase is Phase.FINISHED:
            raise GameOverError()
        if self.current_owner is not Owner.AI:
            raise NotYourTurnError(Owner.AI, self.current_owner)
        if self.phase is not Phase.AWAITING_FIRST_FLIP:
            raise IllegalStateError(f"The AI cannot start a pair while {self.phase.value}.")

    def _flip(self, owner: Owner, index: int) -> None:
        if self.phase is Phase.FINISHED:
            raise GameOverError()
        if owner is not self.current_owner:
            raise NotYourTurnError(owner, self.current_owner)
        if self.phase is Phase.RESOLVING:
            raise IllegalStateError("The revealed mismatch must be settled before the next flip.")

        card = self.board.reveal(index)
        self.flips += 1
        self.memory.observe(card.index, card.value)
        self._emit(EventType.FLIP, {"owner": owner, "index": card.index, "value": card.value})

        if self.phase is Phase.AWAITING_FIRST_FLIP:
            self.pending_first = card
            self.phase = Phase.AWAITING_SECOND_FLIP
            return

        self.pending_second = card
        self.phase = Phase.RESOLVING
        self._resolve()

    def _resolve(self) -> None:
        first, second = self.pending_first, self.pending_second
        assert first is not None and second is not None
        owner = self.current_owner

        if first.value != second.value:
            self._emit(EventType.MISMATCH, {"owner": owner, "indices": [first.index, second.index]})
            return

        self.board.match(first.index, second.index)
        self.memory.forget(first.index)
        self.memory.forget(second.index)
        self.score.record_match(owner)
        self._clear_pending()
        self._emit(
            EventType.MATCH,
            {
                "owner": owner,
                "indices": [first.index, second.index],
                "value": first.value,
                "pairs": self.score.pairs_by_owner[owner],
            },
        )
        if self.board.is_complete():
            self._finish()
        else:
            self.phase = Phase.AWAITING_FIRST_FLIP

    def advance_ai(self) -> None:
        """Play AI pairs while autoplay is on and the AI holds a fresh turn."""
        if not self.ai_autoplay:
            return
        while self.phase is Phase.AWAITING_FIRST_FLIP and self.current_owner is Owner.AI:
            self._play_ai_pair()

    def _play_ai_pair(self) -> None:
        if self.board.hidden_count() < 2:
            self._finish()
            return
        first, second = self.policy.choose_move(self.board, self.memory, self.random_source)
        self._flip(Owner.AI, first)
        self._flip(Owner.AI, second)

    def _finish(self) -> None:
        self._clear_pending()
        self.phase = Phase.FINISHED
        self._emit(
            EventType.FINISHED,
            {"pairs_by_owner": dict(self.score.pairs_by_owner), "turns_taken": self.score.turns_taken},
        )
        if self._on_finished is not None:
            self._on_finished()

    def _clear_pending(self) -> None:
        self.pending_first = None
        self.pending_second = None

    def _emit(self, event_type: EventType, payload: dict[str, Any]) -> None:
        if self._listener is not None:
            self._listener(event_type, payload)
