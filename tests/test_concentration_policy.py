"""Tests for the AI's known-pair > known-single > random move ordering."""

from __future__ import annotations

import random

import pytest

from concentration.concentration_board import Board
from concentration.concentration_policy import AIDecisionPolicy
from concentration.concentration_recall import AIMemoryModel
from framework.errors import IllegalStateError


def _board() -> Board:
    return Board.from_values(2, 4, [0, 1, 2, 3, 3, 2, 1, 0])


@pytest.mark.parametrize("seed", range(10))
def test_known_pair_is_always_played(seed: int) -> None:
    board = _board()
    memory = AIMemoryModel(capacity=16)
    memory.observe(0, 0)
    memory.observe(2, 2)
    memory.observe(5, 2)

    assert AIDecisionPolicy().choose_move(board, memory, random.Random(seed)) == (2, 5)


@pytest.mark.parametrize("seed", range(10))
def test_known_single_is_played_first_with_blind_second(seed: int) -> None:
    board = _board()
    memory = AIMemoryModel(capacity=16)
    memory.observe(1, 1)
    memory.observe(2, 2)

    first, second = AIDecisionPolicy().choose_move(board, memory, random.Random(seed))

    assert first == 1
    assert second != first
    assert second in board.hidden_indices()


@pytest.mark.parametrize("seed", range(10))
def test_empty_memory_picks_two_distinct_hidden_cards(seed: int) -> None:
    board = _board()
    board.reveal(0)
    board.reveal(7)
    board.match(0, 7)

    first, second = AIDecisionPolicy().choose_move(board, AIMemoryModel(capacity=16), random.Random(seed))

    assert first != second
    assert {first, second} <= set(board.hidden_indices())


def test_blind_picks_cover_more_than_one_option() -> None:
    board = _board()
    rng = random.Random(3)
    picks = {AIDecisionPolicy().choose_move(board, AIMemoryModel(capacity=0), rng) for _ in range(50)}

    assert len(picks) > 1


def test_policy_refuses_boards_without_two_hidden_cards() -> None:
    board = Board.from_values(1, 2, [4, 4])
    board.reveal(0)
    board.reveal(1)
    board.match(0, 1)

    with pytest.raises(IllegalStateError):
        AIDecisionPolicy().choose_move(board, AIMemoryModel(capacity=4), random.Random(0))
