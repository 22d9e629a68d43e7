"""Coordinator registry — maps JudgeConfig.strategy to a JudgeCoordinator."""

from skill_eval.config.domain.judge import JudgeConfig
from skill_eval.judge.application.coordinators import (
    DelegatedJudgeCoordinator,
    ParallelJudgeCoordinator,
)
from skill_eval.judge.domain.coordinator import JudgeCoordinator
from skill_eval.judge.domain.observer import JudgeObserver
from skill_eval.judge.infrastructure.factory import (
    LiteLLMDomainJudgeFactory,
    LiteLLMPanelJudgeFactory,
)


def create_judge_coordinator(
    config: JudgeConfig, observer: JudgeObserver
) -> JudgeCoordinator:
    """Return the JudgeCoordinator for config.strategy, wired to LiteLLM judges."""
    if config.strategy == "delegated":
        return DelegatedJudgeCoordinator(
            judge_factory=LiteLLMPanelJudgeFactory(config=config, observer=observer)
        )

    max_concurrent = 1 if config.strategy == "sequential" else config.max_concurrent
    return ParallelJudgeCoordinator(
        judge_factory=LiteLLMDomainJudgeFactory(config=config, observer=observer),
        max_concurrent=max_concurrent,
    )
