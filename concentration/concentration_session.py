"""Composition root for one game of Concentration."""

from __future__ import annotations

import random
from time import time
from typing import Any, Callable
from uuid import uuid4

from framework.errors import GameError, IllegalStateError
from framework.events import Clock, EventType, MatchEvent
from framework.move import Move

from .concentration_board import Board, CardState
from .concentration_config import DEFAULT_AI_MEMORY_CAPACITY, SessionConfig
from .concentration_engine import TurnEngine
from .concentration_moves import Flip
from .concentration_policy import AIDecisionPolicy
from .concentration_recall import AIMemoryModel
from .concentration_result import GameOutcome, TerminationReason
from .concentration_score import ScoreTracker
from .concentration_state import CardView, Owner, Phase, SessionSnapshot, parse_owner

FinishListener = Callable[[GameOutcome], None]


class GameSession:
    """Owns the board, score, AI memory and turn engine of a single game.

    Nothing here is shared between sessions; `restart()` builds a new session
    with fresh instances of every component.
    """

    def __init__(
        self,
        board: Board,
        *,
        starting_owner: Owner | str = Owner.PLAYER,
        ai_memory_capacity: int = DEFAULT_AI_MEMORY_CAPACITY,
        random_source: random.Random | None = None,
        ai_autoplay: bool = True,
        policy: AIDecisionPolicy | None = None,
        game_id: str | None = None,
        seed: int | None = None,
        clock: Clock = time,
    ):
        self.game_id = game_id or f"concentration-{uuid4().hex[:8]}"
        self.seed = seed
        self.starting_owner = parse_owner(starting_owner)
        self.board = board
        self.score = ScoreTracker()
        self.memory = AIMemoryModel(ai_memory_capacity)
        self.random_source = random_source or random.Random(seed)
        self.events: list[MatchEvent] = []
        self.outcome: GameOutcome | None = None
        self._clock = clock
        self._finish_listeners: list[FinishListener] = []
        self._policy = policy
        self.engine = TurnEngine(
            board=board,
            score=self.score,
            memory=self.memory,
            random_source=self.random_source,
            policy=policy,
            starting_owner=self.starting_owner,
            ai_autoplay=ai_autoplay,
            listener=self._record,
            on_finished=self._handle_finished,
        )

    @classmethod
    def start(
        cls,
        rows: int,
        cols: int,
        starting_owner: Owner | str = Owner.PLAYER,
        ai_memory_capacity: int = DEFAULT_AI_MEMORY_CAPACITY,
        random_source: random.Random | None = None,
        *,
        ai_autoplay: bool = True,
        policy: AIDecisionPolicy | None = None,
        seed: int | None = None,
        on_finished: FinishListener | None = None,
        game_id: str | None = None,
        clock: Clock = time,
    ) -> "GameSession":
        """Deal a new board and open the game."""
        rng = random_source or random.Random(seed)
        board = Board.initialize(rows, cols, rng)
        session = cls(
            board,
            starting_owner=starting_owner,
            ai_memory_capacity=ai_memory_capacity,
            random_source=rng,
            ai_autoplay=ai_autoplay,
            policy=policy,
            game_id=game_id,
            seed=seed,
            clock=clock,
        )
        if on_finished is not None:
            session.on_finished(on_finished)
        session.open()
        return session

    @classmethod
    def from_board(cls, board: Board, **kwargs: Any) -> "GameSession":
        """Open a session on an already dealt board (replays and tests)."""
        on_finished = kwargs.pop("on_finished", None)
        session = cls(board, **kwargs)
        if on_finished is not None:
            session.on_finished(on_finished)
        session.open()
        return session

    @classmethod
    def from_config(
        cls,
        config: SessionConfig,
        random_source: random.Random | None = None,
        **kwargs: Any,
    ) -> "GameSession":
        """Build and open a session from validated settings."""
        return cls.start(
            config.rows,
            config.cols,
            starting_owner=config.starting_owner,
            ai_memory_capacity=config.ai_memory_capacity,
            random_source=random_source,
            ai_autoplay=config.ai_autoplay,
            seed=config.seed,
            **kwargs,
        )

    def open(self) -> None:
        """Record the start of play and let the AI move if it goes first."""
        if self.events:
            return
        self._record(
            EventType.SESSION_START,
            {
                "rows": self.board.rows,
                "cols": self.board.cols,
                "seed": self.seed,
                "starting_owner": self.starting_owner,
                "ai_memory_capacity": self.memory.capacity,
            },
        )
        self.engine.start()

    def restart(self, random_source: random.Random | None = None) -> "GameSession":
        """Return a brand-new session with the same settings and a fresh deal.

        Without an explicit `random_source` a seeded session deals again from
        its seed, so the restarted layout is reproducible.
        """
        return GameSession.start(
            self.board.rows,
            self.board.cols,
            starting_owner=self.starting_owner,
            ai_memory_capacity=self.memory.capacity,
            random_source=random_source,
            ai_autoplay=self.engine.ai_autoplay,
            policy=self._policy,
            seed=self.seed if random_source is None else None,
            clock=self._clock,
        )

    def on_finished(self, callback: FinishListener) -> None:
        """Register a callback receiving the final `GameOutcome`."""
        self._finish_listeners.append(callback)
        if self.outcome is not None:
            callback(self.outcome)

    @property
    def is_finished(self) -> bool:
        return self.engine.phase is Phase.FINISHED

    def request_flip(self, owner: Owner | str, index: int) -> SessionSnapshot:
        """Flip a card for `owner` and return the resulting public state."""
        try:
            resolved_owner = _owner_or_error(owner)
            self.engine.flip(resolved_owner, index)
        except GameError as exc:
            self._reject("flip", owner, exc, index=index)
            raise
        return self.snapshot()

    def resolve_mismatch(self) -> SessionSnapshot:
        """Settle the pending mismatch once the host's display delay has elapsed.

        Only the settle step is logged as rejected when it fails; errors raised
        while the AI plays its turns afterwards propagate as they are.
        """
        try:
            self.engine.settle_mismatch()
        except GameError as exc:
            self._reject("resolve_mismatch", self.engine.current_owner, exc)
            raise
        self.engine.advance_ai()
        return self.snapshot()

    def play_ai_turn(self) -> SessionSnapshot:
        """Play the AI's next pair when the host paces AI turns itself."""
        try:
            self.engine.check_ai_turn()
        except GameError as exc:
            self._reject("play_ai_turn", Owner.AI, exc)
            raise
        self.engine.play_ai_turn()
        return self.snapshot()

    def legal_moves(self, owner: Owner | str) -> list[Flip]:
        """Return the flips `owner` may make right now."""
        resolved_owner = parse_owner(owner)
        engine = self.engine
        if resolved_owner is not engine.current_owner:
            return []
        if engine.phase not in (Phase.AWAITING_FIRST_FLIP, Phase.AWAITING_SECOND_FLIP):
            return []
        return [Flip(index=index) for index in self.board.hidden_indices()]

    def apply_move(self, owner: Owner | str, move: Move) -> SessionSnapshot:
        """Apply an agent-issued move."""
        if isinstance(move, Flip):
            return self.request_flip(owner, move.index)
        raise ValueError(f"Unsupported move type: {type(move)!r}")

    def snapshot(self) -> SessionSnapshot:
        """Return the read-only public state."""
        engine = self.engine
        cards = tuple(
            CardView(
                index=card.index,
                value=None if card.state is CardState.HIDDEN else card.value,
                state=card.state,
            )
            for card in self.board.cards
        )
        pending = engine.pending_first.index if engine.pending_first is not None else None
        return SessionSnapshot(
            game_id=self.game_id,
            rows=self.board.rows,
            cols=self.board.cols,
            cards=cards,
            pairs_by_owner=dict(self.score.pairs_by_owner),
            turns_taken=self.score.turns_taken,
            current_owner=engine.current_owner,
            phase=engine.phase,
            pending_index=pending,
            winner=self.score.leader() if self.is_finished else None,
        )

    def build_outcome(
        self,
        reason: TerminationReason = TerminationReason.ALL_PAIRS_MATCHED,
        *,
        winner: Owner | None = None,
        details: str | None = None,
    ) -> GameOutcome:
        """Summarise the session; non-natural endings name their own winner."""
        if reason is TerminationReason.ALL_PAIRS_MATCHED:
            winner = self.score.leader()
        return GameOutcome(
            game_id=self.game_id,
            seed=self.seed,
            winner=winner,
            termination_reason=reason,
            pairs_by_owner=dict(self.score.pairs_by_owner),
            turns_taken=self.score.turns_taken,
            flips=self.engine.flips,
            details=details,
            final_state_digest=self.snapshot().state_digest(),
            event_count=len(self.events),
        )

    def render(self) -> str:
        """Render the board and scoreline for debugging."""
        pairs = self.score.pairs_by_owner
        header = (
            f"owner={self.engine.current_owner.value} phase={self.engine.phase.value} "
            f"player={pairs[Owner.PLAYER]} ai={pairs[Owner.AI]} turns={self.score.turns_taken}"
        )
        return header + "\n" + self.board.render()

    def _handle_finished(self) -> None:
        self.outcome = self.build_outcome()
        for callback in list(self._finish_listeners):
            callback(self.outcome)

    def _reject(self, action: str, owner: Owner | str, error: GameError, **extra: Any) -> None:
        payload: dict[str, Any] = {"action": action, "owner": owner, "error": error.to_dict()}
        payload.update(extra)
        self._record(EventType.REJECTED, payload)

    def _record(self, event_type: EventType, payload: dict[str, Any]) -> None:
        self.events.append(
            MatchEvent.create(
                event_type=event_type,
                game_id=self.game_id,
                sequence=len(self.events),
                payload=payload,
                clock=self._clock,
            )
        )


def _owner_or_error(raw: Owner | str) -> Owner:
    try:
        return parse_owner(raw)
    except ValueError as exc:
        raise IllegalStateError(str(exc)) from exc
