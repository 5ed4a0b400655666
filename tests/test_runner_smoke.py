"""Smoke tests for the match runner, arena and JSONL event logs."""

from __future__ import annotations

from pathlib import Path

from concentration.concentration_moves import Flip, move_from_dict
from concentration.concentration_result import GameOutcome, TerminationReason
from concentration.concentration_state import Owner
from framework.agents.random_agent import RandomAgent
from framework.agents.scripted_agent import ScriptedAgent
from framework.arena import Arena
from framework.events import EventType, read_jsonl
from framework.runner import MatchRunner, RunnerConfig


def test_three_seeded_matches_complete_without_crashes() -> None:
    runner = MatchRunner(RunnerConfig(max_flips=2000))

    for seed in (11, 12, 13):
        run = runner.run_match(RandomAgent("random-player"), seed)

        assert run.result.termination_reason is TerminationReason.ALL_PAIRS_MATCHED
        assert sum(run.result.pairs_by_owner.values()) == 8
        assert run.events[0].event_type is EventType.SESSION_START
        assert run.events[-1].event_type is EventType.FINISHED
        assert run.result.event_count == len(run.events)


def test_same_seed_replays_identically() -> None:
    runner = MatchRunner()

    first = runner.run_match(RandomAgent("random-player"), 21, game_id="replay")
    second = runner.run_match(RandomAgent("random-player"), 21, game_id="replay")

    assert first.result.final_state_digest == second.result.final_state_digest
    assert [event.payload for event in first.events] == [event.payload for event in second.events]


def test_host_paced_ai_turns_complete() -> None:
    run = MatchRunner().run_match(
        RandomAgent("random-player"),
        5,
        {"rows": 2, "cols": 4, "ai_autoplay": False, "starting_owner": "ai"},
    )

    assert run.result.termination_reason is TerminationReason.ALL_PAIRS_MATCHED
    assert sum(run.result.pairs_by_owner.values()) == 4


def test_illegal_flip_forfeits_to_the_ai() -> None:
    agent = ScriptedAgent("off-board", policy=lambda observation, legal_moves: Flip(index=99))

    run = MatchRunner().run_match(agent, 3)

    assert run.result.termination_reason is TerminationReason.ILLEGAL_MOVE_FORFEIT
    assert run.result.winner is Owner.AI
    assert run.events[-1].event_type is EventType.REJECTED


def test_max_flips_stops_the_match() -> None:
    run = MatchRunner(RunnerConfig(max_flips=1)).run_match(RandomAgent("random-player"), 4)

    assert run.result.termination_reason is TerminationReason.MAX_FLIPS
    assert run.result.flips == 1


def test_event_log_written_as_jsonl(tmp_path: Path) -> None:
    runner = MatchRunner(RunnerConfig(event_log_dir=tmp_path))

    run = runner.run_match(RandomAgent("random-player"), 8, {"rows": 2, "cols": 2}, game_id="logged")

    assert run.result.log_path == str(tmp_path / "logged.jsonl")
    events = read_jsonl(tmp_path / "logged.jsonl")
    assert len(events) == run.result.event_count
    assert events[0].payload["starting_owner"] == "player"
    assert GameOutcome.from_dict(run.result.to_dict()) == run.result


def test_logged_owner_keys_read_back_as_owners(tmp_path: Path) -> None:
    runner = MatchRunner()

    log_path = tmp_path / "owners.jsonl"

    run = runner.run_match(RandomAgent("random-player"), 5, {"rows": 2, "cols": 2}, log_path=log_path)

    events = read_jsonl(log_path)
    finished = events[-1]
    assert finished.event_type is EventType.FINISHED
    assert finished.payload["pairs_by_owner"].keys() == {"player", "ai"}
    restored = {Owner(key): count for key, count in finished.payload["pairs_by_owner"].items()}
    assert restored == run.result.pairs_by_owner
    for event in events:
        if event.event_type in (EventType.FLIP, EventType.MATCH):
            Owner(event.payload["owner"])


def test_arena_series_counts_every_match() -> None:
    summary = Arena().run_series(lambda seed: RandomAgent(f"random-{seed}"), seeds=[1, 2, 3, 4])

    assert len(summary.results) == 4
    assert sum(summary.wins.values()) + summary.draws == 4
    assert summary.to_dict()["wins"].keys() == {"player", "ai"}


def test_flip_payload_parses() -> None:
    move = move_from_dict({"type": "Flip", "index": "3"})

    assert move == Flip(index=3)
    assert move.to_dict() == {"index": 3, "type": "Flip"}
