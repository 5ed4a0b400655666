"""Series orchestration: many seeded matches of one agent against the engine AI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Sequence

from concentration.concentration_config import SessionConfig
from concentration.concentration_result import GameOutcome
from concentration.concentration_state import Owner

from .player import Agent
from .runner import MatchRunner


@dataclass(frozen=True)
class ArenaSummary:
    """Aggregated output from a set of matches."""

    results: list[GameOutcome]
    wins: dict[str, int]
    win_rates: dict[str, float]
    draws: int
    average_turns: float

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable summary."""
        return {
            "results": [result.to_dict() for result in self.results],
            "wins": dict(self.wins),
            "win_rates": dict(self.win_rates),
            "draws": self.draws,
            "average_turns": self.average_turns,
        }


class Arena:
    """High-level interface for running many matches."""

    def __init__(self, runner: MatchRunner | None = None):
        self.runner = runner or MatchRunner()

    def run_series(
        self,
        agent_factory: Callable[[int], Agent],
        seeds: Sequence[int],
        session_config: SessionConfig | Mapping[str, Any] | None = None,
        *,
        log_dir: str | Path | None = None,
    ) -> ArenaSummary:
        """Play one match per seed, building a fresh agent for each."""
        results: list[GameOutcome] = []
        for seed in seeds:
            log_path = Path(log_dir) / f"concentration-{seed}.jsonl" if log_dir is not None else None
            run = self.runner.run_match(agent_factory(seed), seed, session_config, log_path=log_path)
            results.append(run.result)
        return summarize(results)


def summarize(results: Sequence[GameOutcome]) -> ArenaSummary:
    """Count wins per owner and draws across outcomes."""
    wins = {owner.value: 0 for owner in Owner}
    draws = 0
    for result in results:
        if result.winner is None:
            draws += 1
        else:
            wins[result.winner.value] += 1
    total = len(results)
    win_rates = {owner: (count / total if total else 0.0) for owner, count in wins.items()}
    average_turns = sum(result.turns_taken for result in results) / total if total else 0.0
    return ArenaSummary(
        results=list(results),
        wins=wins,
        win_rates=win_rates,
        draws=draws,
        average_turns=average_turns,
    )
