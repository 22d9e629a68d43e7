"""Judge configuration model."""

from typing import Literal

from pydantic import BaseModel, Field

type JudgeStrategy = Literal["parallel", "delegated", "sequential"]


class JudgeConfig(BaseModel, frozen=True):
    model: str
    temperature: float = Field(default=0.0, ge=0.0)
    timeout_seconds: float = Field(default=300.0, gt=0)
    strategy: JudgeStrategy = "parallel"
    max_concurrent: int = Field(default=4, ge=1)
