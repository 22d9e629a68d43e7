"""Structlog and composite implementations of the JudgeObserver port."""

import structlog

from skill_eval.judge.domain.observer import JudgeObserver


class StructlogJudgeObserver:
    """Delegates judge domain events to structlog.

    Satisfies the JudgeObserver protocol structurally.
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def judge_scoring_started(self, scenario_id: str, domain: str, model: str) -> None:
        self._log.info(
            "judge.scoring_started",
            scenario_id=scenario_id,
            domain=domain,
            model=model,
        )

    def judge_scoring_completed(
        self,
        scenario_id: str,
        domain: str,
        score: int,
        max_score: int,
        duration_ms: int,
    ) -> None:
        self._log.info(
            "judge.scoring_completed",
            scenario_id=scenario_id,
            domain=domain,
            score=score,
            max_score=max_score,
            duration_ms=duration_ms,
        )

    def judge_scoring_failed(self, scenario_id: str, domain: str, reason: str) -> None:
        self._log.error(
            "judge.scoring_failed",
            scenario_id=scenario_id,
            domain=domain,
            reason=reason,
        )

    def judge_high_temperature_warned(
        self, scenario_id: str, temperature: float
    ) -> None:
        self._log.warning(
            "judge.high_temperature_warned",
            scenario_id=scenario_id,
            temperature=temperature,
        )


class CompositeJudgeObserver:
    """Delegates every judge event to each observer in order.

    Does NOT inherit from the observer Protocol (structural typing).
    """

    def __init__(self, observers: list[JudgeObserver]) -> None:
        self._observers = observers

    def judge_scoring_started(self, scenario_id: str, domain: str, model: str) -> None:
        for obs in self._observers:
            obs.judge_scoring_started(
                scenario_id=scenario_id, domain=domain, model=model
            )

    def judge_scoring_completed(
        self,
        scenario_id: str,
        domain: str,
        score: int,
        max_score: int,
        duration_ms: int,
    ) -> None:
        for obs in self._observers:
            obs.judge_scoring_completed(
                scenario_id=scenario_id,
                domain=domain,
                score=score,
                max_score=max_score,
                duration_ms=duration_ms,
            )

    def judge_scoring_failed(self, scenario_id: str, domain: str, reason: str) -> None:
        for obs in self._observers:
            obs.judge_scoring_failed(
                scenario_id=scenario_id, domain=domain, reason=reason
            )

    def judge_high_temperature_warned(
        self, scenario_id: str, temperature: float
    ) -> None:
        for obs in self._observers:
            obs.judge_high_temperature_warned(
                scenario_id=scenario_id, temperature=temperature
            )
