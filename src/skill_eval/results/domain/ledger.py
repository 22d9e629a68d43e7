"""LedgerEntry and the pure upsert / pass-rate rules of the cumulative ledger."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel, Field

from skill_eval.evaluation.domain.summary import (
    RunKind,
    RunOutcome,
    RunSummary,
    RunTimings,
)


class LedgerEntry(BaseModel, frozen=True):
    """Latest known result for one (scenario, branch) pair."""

    scenario_id: str = Field(min_length=1)
    branch: str
    kind: RunKind
    outcome: RunOutcome
    domain_scores: dict[str, int] = Field(default_factory=dict)
    domain_max_scores: dict[str, int] = Field(default_factory=dict)
    total_score: int = 0
    max_score: int = 0
    percentage: float = 0.0
    assertions_failed: int = 0
    assertions_total: int = 0
    critical_blockers: int = 0
    timings: RunTimings = RunTimings()
    last_run_at: datetime
    run_dir: str | None = None
    git_sha: str = "unknown"
    error_kind: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.scenario_id, self.branch)

    @classmethod
    def from_summary(cls, summary: RunSummary, run_dir: str | None) -> "LedgerEntry":
        return cls(
            scenario_id=summary.scenario_id,
            branch=summary.git.branch,
            kind=summary.kind,
            outcome=summary.outcome,
            domain_scores={j.domain: j.score for j in summary.judgments},
            domain_max_scores={j.domain: j.max_score for j in summary.judgments},
            total_score=summary.total_score,
            max_score=summary.max_score,
            percentage=summary.percentage,
            assertions_failed=len(summary.failed_assertions),
            assertions_total=len(summary.assertion_results),
            critical_blockers=len(summary.critical_blockers),
            timings=summary.timings,
            last_run_at=summary.started_at,
            run_dir=run_dir,
            git_sha=summary.git.sha,
            error_kind=summary.error_kind,
        )


def upsert_entries(
    entries: Sequence[LedgerEntry], entry: LedgerEntry
) -> list[LedgerEntry]:
    """Replace the entry with the same (scenario_id, branch) key, or append it.

    Last write wins. The result is sorted by key so the persisted table is
    stable across writes.
    """
    updated = [existing for existing in entries if existing.key != entry.key]
    updated.append(entry)
    return sorted(updated, key=lambda e: e.key)


def pass_rate(entries: Sequence[LedgerEntry]) -> float | None:
    """Fraction of behavioral runs that passed; infrastructure errors are excluded.

    Returns None when no behavioral run has been recorded yet.
    """
    behavioral = [e for e in entries if e.outcome is not RunOutcome.ERROR]
    if not behavioral:
        return None
    passed = sum(1 for e in behavioral if e.outcome is RunOutcome.PASS)
    return passed / len(behavioral)
