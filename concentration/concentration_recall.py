"""Bounded recall of revealed card positions for the computer opponent."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from .concentration_board import Board


class AIMemoryModel:
    """FIFO-bounded map of position -> value.

    Positions are remembered in the order they were first seen. Once more than
    `capacity` positions are tracked, the oldest sighting is dropped; seeing a
    tracked position again does not refresh it. Both owners' reveals feed the
    model because it stands for what has been visible on the table.
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError("capacity must be >= 0.")
        self.capacity = capacity
        self._recall: dict[int, int] = {}
        self._order: deque[int] = deque()

    def __len__(self) -> int:
        return len(self._recall)

    def __contains__(self, index: object) -> bool:
        return index in self._recall

    @property
    def recall(self) -> Mapping[int, int]:
        """Tracked positions in first-seen order."""
        return {index: self._recall[index] for index in self._order}

    def observe(self, index: int, value: int) -> None:
        """Remember that `index` holds `value`."""
        if index in self._recall:
            return
        self._recall[index] = value
        self._order.append(index)
        while len(self._order) > self.capacity:
            evicted = self._order.popleft()
            del self._recall[evicted]

    def forget(self, index: int) -> None:
        """Drop a position, typically once its pair is matched."""
        if index not in self._recall:
            return
        del self._recall[index]
        self._order.remove(index)

    def reset(self) -> None:
        self._recall.clear()
        self._order.clear()

    def known_pair(self, board: Board | None = None) -> tuple[int, int] | None:
        """Return two tracked positions sharing a value, or None.

        Values are scanned in the order they were first observed and positions
        within a value in first-seen order, so the answer is deterministic.
        When `board` is given, only hidden positions qualify.
        """
        for positions in self._positions_by_value(board).values():
            if len(positions) >= 2:
                return positions[0], positions[1]
        return None

    def known_single(self, board: Board | None = None) -> int | None:
        """Return the first tracked position whose partner is not tracked."""
        for positions in self._positions_by_value(board).values():
            if len(positions) == 1 and self._partner_untracked(positions[0]):
                return positions[0]
        return None

    def _positions_by_value(self, board: Board | None) -> dict[int, list[int]]:
        grouped: dict[int, list[int]] = {}
        for index in self._order:
            if board is not None and not board.card(index).is_hidden:
                continue
            grouped.setdefault(self._recall[index], []).append(index)
        return grouped

    def _partner_untracked(self, index: int) -> bool:
        value = self._recall[index]
        return not any(other != index and self._recall[other] == value for other in self._order)
