"""JudgeCoordinator Protocol — the strategy seam between runner and judges."""

from typing import Protocol

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.config.domain.rubric import RubricConfig
from skill_eval.judge.domain.judgment import Judgment


class JudgeCoordinator(Protocol):
    """Produces one Judgment per requested domain, in the requested order.

    Whether domains are judged by separate concurrent calls or one delegated
    call is invisible to callers.
    """

    async def evaluate(
        self,
        transcript: Transcript,
        domains: list[str],
        rubric: RubricConfig,
        requirements: str,
    ) -> list[Judgment]: ...
