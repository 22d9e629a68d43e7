"""Invoker factory registry — maps AgentConfig.type to the correct AgentInvokerFactory."""

from skill_eval.agent.domain.invoker import AgentInvokerFactory
from skill_eval.agent.domain.observer import AgentObserver
from skill_eval.agent.infrastructure.errors import AgentTypeNotSupportedError
from skill_eval.agent.infrastructure.factory import ClaudeAgentSDKInvokerFactory
from skill_eval.config.domain.agent import AgentConfig

_SUPPORTED_TYPE = "claude_code_sdk"


def create_invoker_factory(
    config: AgentConfig, observer: AgentObserver
) -> AgentInvokerFactory:
    """Return the appropriate AgentInvokerFactory for the given AgentConfig.

    Raises:
        AgentTypeNotSupportedError: if config.type is not a known agent type.
    """
    if config.type == _SUPPORTED_TYPE:
        return ClaudeAgentSDKInvokerFactory(config=config, observer=observer)

    raise AgentTypeNotSupportedError(agent_type=config.type)
