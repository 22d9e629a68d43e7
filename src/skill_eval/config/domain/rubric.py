"""Rubric configuration models: per-domain maxima, criteria and pass threshold."""

from pydantic import BaseModel, Field

from skill_eval.core.names import SafeName

DEFAULT_THRESHOLD_FRACTION = 0.70


class DomainRubric(BaseModel, frozen=True):
    """Scoring bounds and criteria for one evaluation domain.

    ``context`` holds optional reference material (skills, team rules) that the
    judge reads alongside the criteria. The YAML loader fills ``criteria`` and
    ``context`` from ``criteria_file`` / ``context_files`` when those are given.
    """

    max_score: int = Field(default=50, gt=0)
    criteria: str = Field(min_length=1)
    context: str = ""


class RubricConfig(BaseModel, frozen=True):
    threshold_fraction: float = Field(default=DEFAULT_THRESHOLD_FRACTION, gt=0.0, le=1.0)
    domains: dict[SafeName, DomainRubric] = Field(min_length=1)
