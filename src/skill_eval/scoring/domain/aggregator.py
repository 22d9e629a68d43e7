"""Scoring aggregator — combines per-domain Judgments into a pass/fail summary."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict

from skill_eval.config.domain.rubric import DEFAULT_THRESHOLD_FRACTION
from skill_eval.judge.domain.judgment import Judgment


class CriticalBlocker(BaseModel):
    """A blocking defect reported by the judge for one domain."""

    model_config = ConfigDict(frozen=True)

    domain: str
    description: str


class ScoreSummary(BaseModel):
    """Totals and verdict for a set of Judgments."""

    model_config = ConfigDict(frozen=True)

    total_score: int
    max_score: int
    percentage: float
    threshold_fraction: float
    passed: bool
    critical_blockers: tuple[CriticalBlocker, ...] = ()
    under_threshold_domains: tuple[str, ...] = ()


def is_passing(
    total_score: int,
    max_score: int,
    threshold_fraction: float,
    critical_blocker_count: int,
) -> bool:
    """Any critical blocker fails the run regardless of score."""
    if critical_blocker_count > 0 or max_score <= 0:
        return False
    return total_score >= threshold_fraction * max_score


def aggregate(
    judgments: Sequence[Judgment],
    threshold_fraction: float = DEFAULT_THRESHOLD_FRACTION,
) -> ScoreSummary:
    """Sum the Judgments and decide pass/fail. Pure and deterministic."""
    total_score = sum(j.score for j in judgments)
    max_score = sum(j.max_score for j in judgments)
    blockers = tuple(
        CriticalBlocker(domain=j.domain, description=blocker)
        for j in judgments
        for blocker in j.critical_blockers
    )
    under_threshold = tuple(
        j.domain for j in judgments if j.score < threshold_fraction * j.max_score
    )
    percentage = 100.0 * total_score / max_score if max_score > 0 else 0.0

    return ScoreSummary(
        total_score=total_score,
        max_score=max_score,
        percentage=percentage,
        threshold_fraction=threshold_fraction,
        passed=is_passing(total_score, max_score, threshold_fraction, len(blockers)),
        critical_blockers=blockers,
        under_threshold_domains=under_threshold,
    )
