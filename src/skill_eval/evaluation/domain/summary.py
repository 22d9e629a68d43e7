"""RunSummary — the computed, persisted outcome of one scenario run."""

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, model_validator

from skill_eval.differential.domain.assertion import AssertionResult
from skill_eval.judge.domain.judgment import Judgment
from skill_eval.scoring.domain.aggregator import CriticalBlocker


class RunKind(StrEnum):
    DIFFERENTIAL = "differential"
    JUDGED = "judged"


class RunOutcome(StrEnum):
    """pass / behavioral fail / infrastructure error."""

    PASS = "pass"
    FAIL = "fail"
    ERROR = "error"


class RunTimings(BaseModel, frozen=True):
    agent_ms: int = Field(default=0, ge=0)
    judge_ms: int = Field(default=0, ge=0)
    total_ms: int = Field(default=0, ge=0)


class GitRevision(BaseModel, frozen=True):
    sha: str = "unknown"
    branch: str = "unknown"


class RunSummary(BaseModel, frozen=True):
    """Immutable summary computed once per run, persisted and upserted into the ledger.

    ``error_kind`` and ``error_message`` are set only for ERROR outcomes, where
    the run was aborted by an infrastructure failure.
    """

    scenario_id: str = Field(min_length=1)
    kind: RunKind
    outcome: RunOutcome
    started_at: datetime
    judgments: tuple[Judgment, ...] = ()
    assertion_results: tuple[AssertionResult, ...] = ()
    total_score: int = 0
    max_score: int = 0
    percentage: float = 0.0
    threshold_fraction: float
    critical_blockers: tuple[CriticalBlocker, ...] = ()
    under_threshold_domains: tuple[str, ...] = ()
    timings: RunTimings = RunTimings()
    git: GitRevision = GitRevision()
    error_kind: str | None = None
    error_message: str | None = None

    @model_validator(mode="after")
    def _total_matches_judgments(self) -> "RunSummary":
        judged_total = sum(j.score for j in self.judgments)
        if self.total_score != judged_total:
            raise ValueError(
                f"total_score {self.total_score} does not equal the sum of "
                f"judgment scores {judged_total}"
            )
        return self

    @property
    def passed(self) -> bool:
        return self.outcome is RunOutcome.PASS

    @property
    def failed_assertions(self) -> list[AssertionResult]:
        return [result for result in self.assertion_results if not result.passed]
