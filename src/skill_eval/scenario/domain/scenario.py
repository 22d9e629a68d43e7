"""Scenario value object — one behavioral test case for an agent."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from skill_eval.core.names import SafeName


class ScenarioKind(StrEnum):
    DIFFERENTIAL = "differential"
    JUDGED = "judged"


class Scenario(BaseModel):
    """Immutable record parsed from a scenario file.

    ``context`` is the knowledge module reference injected into the agent's
    system prompt: the treatment arm of a differential run, or the agent
    definition of a judged run. Its text is opaque to the harness.
    """

    model_config = ConfigDict(frozen=True)

    id: SafeName
    prompt: str = Field(min_length=1)
    title: str | None = None
    context: str | None = None
    assertions: tuple[str, ...] = ()
    expected_baseline: str | None = None
    expected_treatment: str | None = None
    domains: tuple[SafeName, ...] = ()
    metadata: dict[str, str] = Field(default_factory=dict)

    @property
    def kind(self) -> ScenarioKind:
        return ScenarioKind.DIFFERENTIAL if self.assertions else ScenarioKind.JUDGED
