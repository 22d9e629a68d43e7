"""Judgment — one domain's score for one transcript, plus the judge response models."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from skill_eval.judge.domain.errors import InvalidScoreError


class DomainJudgeResponse(BaseModel):
    """Structured output requested from a single-domain judge call.

    Bounds are deliberately absent here; ``build_judgment`` checks the score
    against the rubric so an out-of-range value surfaces as InvalidScoreError.
    """

    model_config = ConfigDict(frozen=True)

    criteria_scores: dict[str, int] = Field(default_factory=dict)
    score: int
    issues: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    critical_blockers: list[str] = Field(default_factory=list)


class PanelJudgeResponse(BaseModel):
    """Structured output of a delegated call that scores every domain at once."""

    model_config = ConfigDict(frozen=True)

    domains: dict[str, DomainJudgeResponse]


class Judgment(BaseModel):
    """Immutable score for one domain of one transcript."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(min_length=1)
    score: int = Field(ge=0)
    max_score: int = Field(gt=0)
    criteria_scores: dict[str, int] = Field(default_factory=dict)
    issues: tuple[str, ...] = ()
    suggestions: tuple[str, ...] = ()
    critical_blockers: tuple[str, ...] = ()
    raw_response: str = ""

    @model_validator(mode="after")
    def _score_within_max(self) -> "Judgment":
        if self.score > self.max_score:
            raise ValueError(
                f"score {self.score} exceeds max_score {self.max_score}"
            )
        return self

    @property
    def fraction(self) -> float:
        return self.score / self.max_score


def build_judgment(
    domain: str,
    response: DomainJudgeResponse,
    max_score: int,
    raw_response: str = "",
) -> Judgment:
    """Turn a parsed judge response into a Judgment.

    Raises:
        InvalidScoreError: if the score is outside [0, max_score].
    """
    if not 0 <= response.score <= max_score:
        raise InvalidScoreError(
            domain=domain, score=response.score, max_score=max_score
        )

    return Judgment(
        domain=domain,
        score=response.score,
        max_score=max_score,
        criteria_scores=dict(response.criteria_scores),
        issues=tuple(response.issues),
        suggestions=tuple(response.suggestions),
        critical_blockers=tuple(b for b in response.critical_blockers if b.strip()),
        raw_response=raw_response,
    )
