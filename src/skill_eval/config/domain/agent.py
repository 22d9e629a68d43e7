"""Agent configuration model."""

from pydantic import BaseModel, Field


class AgentConfig(BaseModel, frozen=True):
    type: str
    model: str
    timeout_seconds: float = Field(default=600.0, gt=0)
    max_turns: int | None = Field(default=None, ge=1)
