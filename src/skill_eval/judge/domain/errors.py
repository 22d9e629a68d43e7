"""Error types raised by the judge domain."""

from skill_eval.core.errors import SkillEvalError


class InvalidScoreError(SkillEvalError):
    """Raised when a judge reports a score outside [0, max_score].

    Scores are never clamped: an out-of-range score is a judge failure.
    """

    def __init__(self, domain: str, score: float, max_score: int) -> None:
        self.domain = domain
        self.score = score
        self.max_score = max_score
        super().__init__(
            f"Failed to accept judgment for domain '{domain}': "
            f"score {score:g} is outside [0, {max_score}]"
        )


class UnknownDomainError(SkillEvalError):
    """Raised when a requested domain has no rubric entry."""

    def __init__(self, domain: str, known_domains: list[str]) -> None:
        self.domain = domain
        known = ", ".join(sorted(known_domains))
        super().__init__(
            f"Failed to judge domain '{domain}': not in rubric (known: {known})"
        )
