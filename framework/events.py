"""Event schema and JSONL replay logging."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from time import time
from typing import Any, Callable, Iterable, Mapping

from .serialize import json_dumps, to_serializable

Clock = Callable[[], float]


class EventType(str, Enum):
    """Event types recorded while a session is played."""

    SESSION_START = "session_start"
    FLIP = "flip"
    MATCH = "match"
    MISMATCH = "mismatch"
    SETTLE = "settle"
    REJECTED = "rejected"
    FINISHED = "finished"


@dataclass(frozen=True)
class MatchEvent:
    """Single replay event emitted during a session."""

    event_type: EventType
    game_id: str
    sequence: int
    timestamp_ms: int
    payload: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        """Return JSON-serializable event data."""
        return {
            "event_type": self.event_type.value,
            "game_id": self.game_id,
            "sequence": self.sequence,
            "timestamp_ms": self.timestamp_ms,
            "payload": to_serializable(self.payload),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchEvent":
        """Build an event from a dictionary payload."""
        return cls(
            event_type=EventType(str(data["event_type"])),
            game_id=str(data["game_id"]),
            sequence=int(data["sequence"]),
            timestamp_ms=int(data["timestamp_ms"]),
            payload=dict(data.get("payload", {})),
        )

    @classmethod
    def create(
        cls,
        event_type: EventType,
        game_id: str,
        sequence: int,
        payload: dict[str, Any],
        clock: Clock = time,
    ) -> "MatchEvent":
        """Construct an event stamped by `clock` (seconds since the epoch)."""
        return cls(
            event_type=event_type,
            game_id=game_id,
            sequence=sequence,
            timestamp_ms=int(clock() * 1000),
            payload=payload,
        )


def write_jsonl(path: str | Path, events: Iterable[MatchEvent]) -> None:
    """Persist events as JSONL to disk."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as handle:
        for event in events:
            handle.write(json_dumps(event.to_dict()))
            handle.write("\n")


def read_jsonl(path: str | Path) -> list[MatchEvent]:
    """Load events previously written by `write_jsonl`."""
    events: list[MatchEvent] = []
    with Path(path).open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if line:
                events.append(MatchEvent.from_dict(json.loads(line)))
    return events
