"""DifferentialReport — outcome of one RED/GREEN comparison."""

from pydantic import BaseModel

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.differential.domain.assertion import AssertionResult


class DifferentialReport(BaseModel, frozen=True):
    """Both transcripts plus the per-assertion results.

    The run passes iff no classification fires on any assertion.
    """

    baseline: Transcript
    treatment: Transcript
    results: tuple[AssertionResult, ...]

    @property
    def failures(self) -> list[AssertionResult]:
        return [result for result in self.results if not result.passed]

    @property
    def passed(self) -> bool:
        return not self.failures
