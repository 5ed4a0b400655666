"""Move definitions for Concentration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from framework.move import Move


class MoveType(str, Enum):
    """Supported move discriminators."""

    FLIP = "Flip"


@dataclass(frozen=True)
class Flip(Move):
    """Turn over the card at a board index."""

    index: int
    move_type = MoveType.FLIP.value


def move_from_dict(data: Mapping[str, Any]) -> Move:
    """Parse a Concentration move from a JSON payload."""
    move_type = data.get("type") or data.get("move_type")
    if move_type == MoveType.FLIP.value:
        if "index" not in data:
            raise ValueError("Flip payload requires an 'index'.")
        return Flip(index=int(data["index"]))
    raise ValueError(f"Unknown Concentration move type: {move_type!r}")
