"""Card and board model for Concentration."""

from __future__ import annotations

import random
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from framework.errors import IllegalStateError, InvalidDimensionsError, InvalidIndexError


class CardState(str, Enum):
    """Visibility of a single card."""

    HIDDEN = "hidden"
    REVEALED = "revealed"
    MATCHED = "matched"


@dataclass
class Card:
    """One board position holding a pair value."""

    index: int
    value: int
    state: CardState = CardState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        return self.state is CardState.HIDDEN


class Board:
    """Fixed-shape grid of paired cards.

    The shape and the value layout never change after construction; only card
    states move between HIDDEN, REVEALED and MATCHED. At most two cards are
    REVEALED at any moment, since the engine always matches or resets a pair
    before the next one is opened.
    """

    def __init__(self, rows: int, cols: int, values: Sequence[int]):
        _validate_dimensions(rows, cols)
        if len(values) != rows * cols:
            raise InvalidDimensionsError(rows, cols, f"expected {rows * cols} values, received {len(values)}")
        unpaired = sorted(value for value, count in Counter(values).items() if count != 2)
        if unpaired:
            raise InvalidDimensionsError(
                rows,
                cols,
                f"every value must appear on exactly two cards, offending values: {unpaired}",
            )
        self.rows = rows
        self.cols = cols
        self.cards: tuple[Card, ...] = tuple(Card(index=index, value=value) for index, value in enumerate(values))

    @classmethod
    def initialize(cls, rows: int, cols: int, random_source: random.Random | None = None) -> "Board":
        """Deal `rows*cols/2` pairs in a uniformly shuffled layout."""
        _validate_dimensions(rows, cols)
        rng = random_source or random.Random()
        pair_count = rows * cols // 2
        deck = [value for value in range(pair_count) for _ in range(2)]
        rng.shuffle(deck)
        return cls(rows, cols, deck)

    @classmethod
    def from_values(cls, rows: int, cols: int, values: Sequence[int]) -> "Board":
        """Build a board from an explicit layout (replays and tests)."""
        return cls(rows, cols, list(values))

    def __len__(self) -> int:
        return len(self.cards)

    def card(self, index: int) -> Card:
        """Return the card at `index`."""
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(self.cards):
            raise InvalidIndexError(index, len(self.cards))
        return self.cards[index]

    def reveal(self, index: int) -> Card:
        """Turn a hidden card face up."""
        card = self.card(index)
        if card.state is not CardState.HIDDEN:
            raise IllegalStateError(f"Card {index} is already {card.state.value}.")
        card.state = CardState.REVEALED
        return card

    def match(self, index_a: int, index_b: int) -> None:
        """Lock two revealed cards as a matched pair."""
        self._transition_pair(index_a, index_b, CardState.MATCHED)

    def reset_pair(self, index_a: int, index_b: int) -> None:
        """Turn two revealed cards face down again."""
        self._transition_pair(index_a, index_b, CardState.HIDDEN)

    def is_complete(self) -> bool:
        return all(card.state is CardState.MATCHED for card in self.cards)

    def hidden_indices(self) -> list[int]:
        return [card.index for card in self.cards if card.state is CardState.HIDDEN]

    def hidden_count(self) -> int:
        return sum(1 for card in self.cards if card.state is CardState.HIDDEN)

    def revealed_indices(self) -> list[int]:
        return [card.index for card in self.cards if card.state is CardState.REVEALED]

    def matched_pairs(self) -> int:
        return sum(1 for card in self.cards if card.state is CardState.MATCHED) // 2

    def partner_of(self, index: int) -> int:
        """Return the index of the other card carrying the same value."""
        value = self.card(index).value
        for card in self.cards:
            if card.value == value and card.index != index:
                return card.index
        raise IllegalStateError(f"Card {index} has no partner.")

    def _transition_pair(self, index_a: int, index_b: int, target: CardState) -> None:
        if index_a == index_b:
            raise IllegalStateError("A pair needs two distinct cards.")
        card_a = self.card(index_a)
        card_b = self.card(index_b)
        for card in (card_a, card_b):
            if card.state is not CardState.REVEALED:
                raise IllegalStateError(f"Card {card.index} is {card.state.value}, expected revealed.")
        card_a.state = target
        card_b.state = target

    def render(self) -> str:
        """Render the board for debugging: `??` hidden, value when face up, `--` matched."""
        tokens = []
        for card in self.cards:
            if card.state is CardState.HIDDEN:
                tokens.append("??")
            elif card.state is CardState.MATCHED:
                tokens.append("--")
            else:
                tokens.append(f"{card.value:02d}")
        return "\n".join(" ".join(tokens[row : row + self.cols]) for row in range(0, len(tokens), self.cols))


def _validate_dimensions(rows: int, cols: int) -> None:
    if rows <= 0 or cols <= 0:
        raise InvalidDimensionsError(rows, cols, "rows and cols must be positive")
    if (rows * cols) % 2 != 0:
        raise InvalidDimensionsError(rows, cols, "cell count must be even")
