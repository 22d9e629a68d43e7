"""Error types raised by judge infrastructure."""

from skill_eval.core.errors import SkillEvalError


class JudgeError(SkillEvalError):
    """Base for judge call failures; a failed judge never defaults to a score."""


class JudgeInvocationError(JudgeError):
    """Raised when the judge model cannot be reached or the provider returns an error."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to score response: {reason}")


class JudgeTimeoutError(JudgeError):
    """Raised when the judge call does not return before the deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Failed to score response: judge timed out after {timeout_seconds:g}s"
        )


class JudgeOutputFormatError(JudgeError):
    """Raised when the judge response cannot be parsed into the expected structure."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse judge response: {reason}")
