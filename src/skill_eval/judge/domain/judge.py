"""DomainJudge and PanelJudge Protocols, and the factories that build them."""

from typing import Protocol

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.config.domain.rubric import DomainRubric
from skill_eval.judge.domain.judgment import Judgment


class DomainJudge(Protocol):
    """Scores one transcript against one domain's rubric.

    Each instance is constructed once per scenario run.
    """

    async def score(
        self,
        transcript: Transcript,
        requirements: str,
        domain: str,
        rubric: DomainRubric,
    ) -> Judgment: ...


class PanelJudge(Protocol):
    """Scores one transcript against several domains in a single call.

    Returns one Judgment per key of ``rubrics``, in the same order.
    """

    async def score(
        self,
        transcript: Transcript,
        requirements: str,
        rubrics: dict[str, DomainRubric],
    ) -> list[Judgment]: ...


class DomainJudgeFactory(Protocol):
    def create(self, scenario_id: str) -> DomainJudge: ...


class PanelJudgeFactory(Protocol):
    def create(self, scenario_id: str) -> PanelJudge: ...
