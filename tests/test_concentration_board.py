"""Board dealing and card state transition tests."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from concentration.concentration_board import Board, CardState
from framework.errors import IllegalStateError, InvalidDimensionsError, InvalidIndexError


@pytest.mark.parametrize("rows, cols", [(1, 2), (2, 2), (3, 4), (4, 4), (5, 6)])
def test_initialize_places_every_value_exactly_twice(rows: int, cols: int) -> None:
    board = Board.initialize(rows, cols, random.Random(rows * 31 + cols))

    counts = Counter(card.value for card in board.cards)
    assert len(board) == rows * cols
    assert set(counts) == set(range(rows * cols // 2))
    assert all(count == 2 for count in counts.values())
    assert all(card.state is CardState.HIDDEN for card in board.cards)
    assert [card.index for card in board.cards] == list(range(rows * cols))


@pytest.mark.parametrize("rows, cols", [(3, 3), (1, 1), (5, 3), (0, 4), (-2, 2)])
def test_initialize_rejects_odd_or_empty_grids(rows: int, cols: int) -> None:
    with pytest.raises(InvalidDimensionsError):
        Board.initialize(rows, cols, random.Random(0))


def test_same_random_source_seed_deals_same_layout() -> None:
    first = Board.initialize(4, 4, random.Random(42))
    second = Board.initialize(4, 4, random.Random(42))

    assert [card.value for card in first.cards] == [card.value for card in second.cards]


def test_from_values_requires_exact_pairs() -> None:
    with pytest.raises(InvalidDimensionsError) as excinfo:
        Board.from_values(2, 2, [0, 0, 0, 1])

    assert excinfo.value.to_dict()["rows"] == 2
    assert "exactly two cards" in str(excinfo.value)


def test_reveal_rejects_out_of_range_and_face_up_cards() -> None:
    board = Board.from_values(2, 2, [0, 1, 0, 1])

    with pytest.raises(InvalidIndexError):
        board.reveal(4)
    with pytest.raises(InvalidIndexError):
        board.reveal(-1)

    board.reveal(0)
    with pytest.raises(IllegalStateError):
        board.reveal(0)

    board.reveal(2)
    board.match(0, 2)
    with pytest.raises(IllegalStateError):
        board.reveal(2)


def test_match_and_reset_require_revealed_cards() -> None:
    board = Board.from_values(2, 2, [0, 1, 0, 1])
    board.reveal(0)

    with pytest.raises(IllegalStateError):
        board.match(0, 2)
    with pytest.raises(IllegalStateError):
        board.reset_pair(0, 1)
    assert board.card(0).state is CardState.REVEALED


def test_reset_then_reveal_shows_the_same_value() -> None:
    board = Board.initialize(2, 3, random.Random(9))
    values = [card.value for card in board.cards]

    board.reveal(0)
    board.reveal(1)
    board.reset_pair(0, 1)
    assert board.hidden_count() == 6

    assert board.reveal(1).value == values[1]
    assert board.reveal(0).value == values[0]


def test_is_complete_only_when_every_card_matched() -> None:
    board = Board.from_values(1, 4, [3, 8, 8, 3])

    board.reveal(1)
    board.reveal(2)
    board.match(1, 2)
    assert not board.is_complete()
    assert board.partner_of(0) == 3

    board.reveal(0)
    board.reveal(3)
    board.match(0, 3)
    assert board.is_complete()
    assert board.matched_pairs() == 2
