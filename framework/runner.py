"""Autonomous match runner: an agent plays the human seat against the engine AI."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping
from uuid import uuid4

from concentration.concentration_config import SessionConfig
from concentration.concentration_result import GameOutcome, TerminationReason
from concentration.concentration_session import GameSession
from concentration.concentration_state import Owner, Phase

from .errors import AgentExecutionError, GameError, IllegalMoveError, MatchConfigurationError
from .events import MatchEvent, write_jsonl
from .player import Agent


@dataclass(frozen=True)
class RunnerConfig:
    """Runtime configuration for match execution."""

    max_flips: int = 1000
    max_illegal_retries: int = 0
    event_log_dir: str | Path | None = None


@dataclass(frozen=True)
class MatchRun:
    """Complete execution artifact for one match."""

    result: GameOutcome
    events: list[MatchEvent]


class MatchRunner:
    """Plays sessions to completion, settling mismatches the way a host would."""

    def __init__(self, config: RunnerConfig | None = None):
        self.config = config or RunnerConfig()

    def run_match(
        self,
        agent: Agent,
        seed: int,
        session_config: SessionConfig | Mapping[str, Any] | None = None,
        *,
        game_id: str | None = None,
        log_path: str | Path | None = None,
    ) -> MatchRun:
        """Run a full match and return result + event history."""
        if not isinstance(agent, Agent):
            raise MatchConfigurationError(f"Expected an Agent for the player seat, received {type(agent).__name__}.")
        config = self._resolve_config(session_config).model_copy(update={"seed": seed})
        resolved_game_id = game_id or f"concentration-{seed}-{uuid4().hex[:8]}"

        agent.reset(resolved_game_id, Owner.PLAYER.value, seed, config.model_dump(mode="json"))
        session = GameSession.from_config(config, random.Random(seed), game_id=resolved_game_id)

        illegal_moves = 0
        while not session.is_finished:
            if session.engine.flips >= self.config.max_flips:
                outcome = session.build_outcome(
                    TerminationReason.MAX_FLIPS,
                    details=f"Reached max_flips={self.config.max_flips}.",
                )
                return self._finish(agent, session, outcome, log_path)

            snapshot = session.snapshot()
            if snapshot.phase is Phase.RESOLVING:
                session.resolve_mismatch()
                continue
            if snapshot.current_owner is Owner.AI:
                session.play_ai_turn()
                continue

            try:
                move = agent.act(snapshot, session.legal_moves(Owner.PLAYER))
            except Exception as exc:  # pragma: no cover - protective path
                error = AgentExecutionError(agent.agent_id, f"Agent act() failed: {exc}")
                outcome = session.build_outcome(TerminationReason.AGENT_EXCEPTION, winner=Owner.AI, details=str(error))
                return self._finish(agent, session, outcome, log_path)

            try:
                session.apply_move(Owner.PLAYER, move)
            except (GameError, ValueError) as exc:
                illegal_moves += 1
                error = IllegalMoveError(Owner.PLAYER.value, move, str(exc))
                agent.on_illegal_move(error, snapshot)
                if illegal_moves > self.config.max_illegal_retries:
                    outcome = session.build_outcome(
                        TerminationReason.ILLEGAL_MOVE_FORFEIT,
                        winner=Owner.AI,
                        details=str(error),
                    )
                    return self._finish(agent, session, outcome, log_path)

        assert session.outcome is not None
        return self._finish(agent, session, session.outcome, log_path)

    def _finish(
        self,
        agent: Agent,
        session: GameSession,
        outcome: GameOutcome,
        log_path: str | Path | None,
    ) -> MatchRun:
        resolved_log_path = self._resolve_log_path(log_path=log_path, game_id=session.game_id)
        history = list(session.events)
        final_outcome = replace(
            outcome,
            event_count=len(history),
            log_path=str(resolved_log_path) if resolved_log_path is not None else None,
        )
        if resolved_log_path is not None:
            write_jsonl(resolved_log_path, history)
        agent.on_game_end(final_outcome, history)
        return MatchRun(result=final_outcome, events=history)

    def _resolve_log_path(self, *, log_path: str | Path | None, game_id: str) -> Path | None:
        if log_path is not None:
            return Path(log_path)
        if self.config.event_log_dir is None:
            return None
        return Path(self.config.event_log_dir) / f"{game_id}.jsonl"

    def _resolve_config(self, session_config: SessionConfig | Mapping[str, Any] | None) -> SessionConfig:
        if isinstance(session_config, SessionConfig):
            return session_config
        return SessionConfig.model_validate(dict(session_config or {}))
