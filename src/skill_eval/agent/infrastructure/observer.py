"""Structlog and composite implementations of the AgentObserver port."""

import structlog

from skill_eval.agent.domain.observer import AgentObserver


class StructlogAgentObserver:
    """Delegates agent domain events to structlog.

    Satisfies the AgentObserver protocol structurally. Streamed text is logged
    at debug level only; the live log carries it in full.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def agent_invocation_started(
        self, scenario_id: str, variant: str, model: str
    ) -> None:
        self._log.info(
            "agent.invocation_started",
            scenario_id=scenario_id,
            variant=variant,
            model=model,
        )

    def agent_text_received(self, scenario_id: str, variant: str, text: str) -> None:
        self._log.debug(
            "agent.text_received",
            scenario_id=scenario_id,
            variant=variant,
            chars=len(text),
        )

    def agent_invocation_completed(
        self,
        scenario_id: str,
        variant: str,
        duration_ms: int,
        num_turns: int | None,
        cost_usd: float | None,
    ) -> None:
        self._log.info(
            "agent.invocation_completed",
            scenario_id=scenario_id,
            variant=variant,
            duration_ms=duration_ms,
            num_turns=num_turns,
            cost_usd=cost_usd,
        )

    def agent_invocation_failed(
        self, scenario_id: str, variant: str, reason: str
    ) -> None:
        self._log.error(
            "agent.invocation_failed",
            scenario_id=scenario_id,
            variant=variant,
            reason=reason,
        )


class CompositeAgentObserver:
    """Delegates every agent event to each observer in order.

    Does NOT inherit from the observer Protocol (structural typing).
    """

    def __init__(self, observers: list[AgentObserver]) -> None:
        self._observers = observers

    def agent_invocation_started(
        self, scenario_id: str, variant: str, model: str
    ) -> None:
        for obs in self._observers:
            obs.agent_invocation_started(
                scenario_id=scenario_id, variant=variant, model=model
            )

    def agent_text_received(self, scenario_id: str, variant: str, text: str) -> None:
        for obs in self._observers:
            obs.agent_text_received(
                scenario_id=scenario_id, variant=variant, text=text
            )

    def agent_invocation_completed(
        self,
        scenario_id: str,
        variant: str,
        duration_ms: int,
        num_turns: int | None,
        cost_usd: float | None,
    ) -> None:
        for obs in self._observers:
            obs.agent_invocation_completed(
                scenario_id=scenario_id,
                variant=variant,
                duration_ms=duration_ms,
                num_turns=num_turns,
                cost_usd=cost_usd,
            )

    def agent_invocation_failed(
        self, scenario_id: str, variant: str, reason: str
    ) -> None:
        for obs in self._observers:
            obs.agent_invocation_failed(
                scenario_id=scenario_id, variant=variant, reason=reason
            )
