"""JudgeObserver port — domain events emitted during judge invocations."""

from typing import Protocol


class JudgeObserver(Protocol):
    """Observer port for judge domain events.

    Implementations may log to structlog, append to the live log, or record for tests.
    """

    def judge_scoring_started(self, scenario_id: str, domain: str, model: str) -> None: ...

    def judge_scoring_completed(
        self,
        scenario_id: str,
        domain: str,
        score: int,
        max_score: int,
        duration_ms: int,
    ) -> None: ...

    def judge_scoring_failed(self, scenario_id: str, domain: str, reason: str) -> None: ...

    def judge_high_temperature_warned(
        self, scenario_id: str, temperature: float
    ) -> None: ...
