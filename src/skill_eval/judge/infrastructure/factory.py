"""LiteLLM judge factories — construct per-scenario judge instances."""

import litellm

from skill_eval.config.domain.judge import JudgeConfig
from skill_eval.judge.domain.judge import DomainJudge, PanelJudge
from skill_eval.judge.domain.observer import JudgeObserver
from skill_eval.judge.infrastructure.litellm import (
    LiteLLMDomainJudge,
    LiteLLMPanelJudge,
)


class LiteLLMDomainJudgeFactory:
    """Creates LiteLLMDomainJudge instances configured for a given scenario."""

    def __init__(self, config: JudgeConfig, observer: JudgeObserver) -> None:
        litellm.suppress_debug_info = True
        self._config = config
        self._observer = observer

    def create(self, scenario_id: str) -> DomainJudge:
        return LiteLLMDomainJudge(
            config=self._config, scenario_id=scenario_id, observer=self._observer
        )


class LiteLLMPanelJudgeFactory:
    """Creates LiteLLMPanelJudge instances configured for a given scenario."""

    def __init__(self, config: JudgeConfig, observer: JudgeObserver) -> None:
        litellm.suppress_debug_info = True
        self._config = config
        self._observer = observer

    def create(self, scenario_id: str) -> PanelJudge:
        return LiteLLMPanelJudge(
            config=self._config, scenario_id=scenario_id, observer=self._observer
        )
