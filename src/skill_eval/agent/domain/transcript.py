"""Transcript value object — the captured output of one agent invocation."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Variant(StrEnum):
    BASELINE = "baseline"
    TREATMENT = "treatment"
    PLAN = "plan"


class Transcript(BaseModel):
    """Immutable, write-once record of one agent response."""

    model_config = ConfigDict(frozen=True)

    scenario_id: str
    variant: Variant
    text: str
    captured_at: datetime
    duration_ms: int = Field(ge=0)
    num_turns: int | None = None
    cost_usd: float | None = None
