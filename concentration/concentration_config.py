"""Pydantic configuration for a Concentration session."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .concentration_state import Owner, parse_owner

DEFAULT_ROWS = 4
DEFAULT_COLS = 4
DEFAULT_AI_MEMORY_CAPACITY = 16


class SessionConfig(BaseModel):
    """Validated settings for building a `GameSession`.

    Parity of the cell count is checked by the board itself so that an odd grid
    surfaces as `InvalidDimensionsError` no matter how the session was built.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    rows: int = Field(default=DEFAULT_ROWS, ge=1)
    cols: int = Field(default=DEFAULT_COLS, ge=1)
    starting_owner: Owner = Owner.PLAYER
    ai_memory_capacity: int = Field(default=DEFAULT_AI_MEMORY_CAPACITY, ge=0)
    ai_autoplay: bool = True
    seed: int | None = None

    @field_validator("starting_owner", mode="before")
    @classmethod
    def _coerce_owner(cls, value: Any) -> Owner:
        return parse_owner(value)
