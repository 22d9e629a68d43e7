"""AgentObserver port — domain events emitted during agent invocations."""

from typing import Protocol


class AgentObserver(Protocol):
    """Observer port for agent domain events.

    Implementations may log to structlog, append to the live log, or record for tests.
    """

    def agent_invocation_started(
        self, scenario_id: str, variant: str, model: str
    ) -> None: ...

    def agent_text_received(self, scenario_id: str, variant: str, text: str) -> None: ...

    def agent_invocation_completed(
        self,
        scenario_id: str,
        variant: str,
        duration_ms: int,
        num_turns: int | None,
        cost_usd: float | None,
    ) -> None: ...

    def agent_invocation_failed(
        self, scenario_id: str, variant: str, reason: str
    ) -> None: ...
