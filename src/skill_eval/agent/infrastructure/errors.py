"""Error types raised by agent infrastructure."""

from skill_eval.core.errors import SkillEvalError


class InvocationError(SkillEvalError):
    """Base for agent call failures; these are infrastructure, not behavioral, failures."""


class InvocationTimeoutError(InvocationError):
    """Raised when the agent does not finish before the deadline."""

    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(
            f"Failed to invoke agent: timed out after {timeout_seconds:g}s"
        )


class InvocationProcessError(InvocationError):
    """Raised on a non-zero process exit, SDK failure, or API error response."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to invoke agent: {reason}")


class AgentTypeNotSupportedError(SkillEvalError):
    """Raised when the agent type specified in config is not a known agent type."""

    def __init__(self, agent_type: str) -> None:
        super().__init__(
            f"Failed to create agent factory: unsupported agent type '{agent_type}'"
        )
