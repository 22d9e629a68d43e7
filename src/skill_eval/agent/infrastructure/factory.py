"""ClaudeAgentSDKInvokerFactory — constructs ClaudeAgentSDKInvoker instances."""

from skill_eval.agent.domain.invoker import AgentInvoker
from skill_eval.agent.domain.observer import AgentObserver
from skill_eval.agent.domain.transcript import Variant
from skill_eval.agent.infrastructure.claude_sdk import ClaudeAgentSDKInvoker
from skill_eval.config.domain.agent import AgentConfig


class ClaudeAgentSDKInvokerFactory:
    """Creates ClaudeAgentSDKInvoker instances for a given scenario and variant."""

    def __init__(self, config: AgentConfig, observer: AgentObserver) -> None:
        self._config = config
        self._observer = observer

    def create(self, scenario_id: str, variant: Variant) -> AgentInvoker:
        """Construct a new ClaudeAgentSDKInvoker for the given scenario and variant."""
        return ClaudeAgentSDKInvoker(
            config=self._config,
            scenario_id=scenario_id,
            variant=variant,
            observer=self._observer,
        )
