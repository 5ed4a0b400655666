"""Validation tests for session settings."""

from __future__ import annotations

import random

import pytest
from pydantic import ValidationError

from concentration.concentration_config import SessionConfig
from concentration.concentration_session import GameSession
from concentration.concentration_state import Owner, Phase
from framework.errors import InvalidDimensionsError


def test_defaults_describe_a_four_by_four_game() -> None:
    config = SessionConfig()

    assert (config.rows, config.cols) == (4, 4)
    assert config.starting_owner is Owner.PLAYER
    assert config.ai_memory_capacity == 16
    assert config.ai_autoplay is True


def test_owner_strings_are_case_insensitive() -> None:
    config = SessionConfig.model_validate({"starting_owner": "AI"})

    assert config.starting_owner is Owner.AI


@pytest.mark.parametrize(
    "payload",
    [
        {"rows": 0},
        {"ai_memory_capacity": -1},
        {"starting_owner": "spectator"},
        {"unknown": True},
    ],
)
def test_invalid_settings_are_rejected(payload: dict) -> None:
    with pytest.raises(ValidationError):
        SessionConfig.model_validate(payload)


def test_odd_grid_passes_config_but_fails_at_deal() -> None:
    config = SessionConfig(rows=3, cols=3)

    with pytest.raises(InvalidDimensionsError):
        GameSession.from_config(config)


def test_from_config_builds_a_playable_session() -> None:
    config = SessionConfig(rows=2, cols=3, ai_memory_capacity=4, seed=12)
    session = GameSession.from_config(config, random.Random(12))

    snapshot = session.snapshot()
    assert (snapshot.rows, snapshot.cols) == (2, 3)
    assert len(snapshot.cards) == 6
    assert snapshot.phase is Phase.AWAITING_FIRST_FLIP
    assert session.memory.capacity == 4
    assert session.seed == 12
