"""Inbound payload schemas for session upserts."""

from __future__ import annotations

import math
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

MAX_SPLITS = 200_000
# Upper bound of a 32-bit INTEGER column.
MAX_INT32 = 2**31 - 1
# 9999-12-31T23:59:59.999Z, the last instant a datetime can hold.
MAX_EPOCH_MS = 253_402_300_799_999


class GameMode(str, Enum):
    RACING = "racing"
    SOCCER = "soccer"


def _require_json_number(value: Any) -> Any:
    # Pydantic's lax mode would coerce "12" and True; clients must send numbers.
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"Expected number, received {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError("Expected finite number")
    return value


Int32 = Annotated[int, BeforeValidator(_require_json_number), Field(ge=0, le=MAX_INT32)]
EpochMs = Annotated[int, BeforeValidator(_require_json_number), Field(ge=0, le=MAX_EPOCH_MS)]
Score = Annotated[Decimal, BeforeValidator(_require_json_number)]


class SplitIn(BaseModel):
    """One checkpoint as submitted by the client."""

    model_config = ConfigDict(extra="ignore")

    t: Int32
    lap: Int32
    score: Score
    note: Optional[str] = None


class SessionPayload(BaseModel):
    """Full session snapshot as submitted by the client (camelCase on the wire)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(min_length=3)
    player: str = Field(min_length=1)
    mode: GameMode
    started_at: EpochMs = Field(alias="startedAt")
    duration_ms: Int32 = Field(alias="durationMs")
    total_score: Score = Field(alias="totalScore")
    splits: List[SplitIn] = Field(default_factory=list, max_length=MAX_SPLITS)

    @property
    def max_split_t(self) -> int:
        return max((split.t for split in self.splits), default=0)


__all__ = ["GameMode", "MAX_EPOCH_MS", "MAX_INT32", "MAX_SPLITS", "SessionPayload", "SplitIn"]
