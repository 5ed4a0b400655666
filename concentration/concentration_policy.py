"""Move selection for the computer opponent."""

from __future__ import annotations

import random

from framework.errors import IllegalStateError

from .concentration_board import Board
from .concentration_recall import AIMemoryModel


class AIDecisionPolicy:
    """Known pair first, then a remembered single plus a blind guess, else two blind guesses."""

    def choose_move(
        self,
        board: Board,
        memory: AIMemoryModel,
        random_source: random.Random,
    ) -> tuple[int, int]:
        """Return the two indices the AI flips this turn."""
        hidden = board.hidden_indices()
        if len(hidden) < 2:
            raise IllegalStateError("The AI needs at least two hidden cards to move.")

        pair = memory.known_pair(board)
        if pair is not None:
            return pair

        hint = memory.known_single(board)
        if hint is not None:
            second = random_source.choice([index for index in hidden if index != hint])
            return hint, second

        first, second = random_source.sample(hidden, 2)
        return first, second
