"""AgentInvoker and AgentInvokerFactory Protocols."""

from typing import Protocol

from skill_eval.agent.domain.transcript import Transcript, Variant


class AgentInvoker(Protocol):
    """Runs one blocking call against an external agent.

    Each instance is constructed once per (scenario, variant) invocation.
    """

    async def invoke(
        self,
        prompt: str,
        system_context: str | None = None,
        timeout_seconds: float | None = None,
    ) -> Transcript: ...


class AgentInvokerFactory(Protocol):
    """Constructs a new AgentInvoker for a given (scenario, variant) pair."""

    def create(self, scenario_id: str, variant: Variant) -> AgentInvoker: ...
