"""Top-level HarnessConfig aggregate — the root configuration object."""

from pydantic import BaseModel, Field

from skill_eval.config.domain.agent import AgentConfig
from skill_eval.config.domain.judge import JudgeConfig
from skill_eval.config.domain.rubric import RubricConfig
from skill_eval.config.domain.storage import StorageConfig


class HarnessConfig(BaseModel, frozen=True):
    """Root configuration aggregate for a skill-eval harness."""

    name: str = Field(min_length=1)
    agent: AgentConfig
    judge: JudgeConfig
    rubric: RubricConfig
    storage: StorageConfig
