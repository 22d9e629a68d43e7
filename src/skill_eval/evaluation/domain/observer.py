"""Observer port for the evaluation domain — defines events in domain language."""

from typing import Protocol


class EvaluationObserver(Protocol):
    """Observer port emitting structured events during a scenario run.

    Implementations may log to structlog, append to the live log, drive a
    progress display, or record for tests.
    """

    def run_started(self, scenario_id: str, kind: str, phases: list[str]) -> None: ...

    def phase_started(self, scenario_id: str, phase: str) -> None: ...

    def phase_completed(self, scenario_id: str, phase: str, duration_ms: int) -> None: ...

    def run_completed(
        self,
        scenario_id: str,
        outcome: str,
        total_score: int,
        max_score: int,
        run_dir: str,
    ) -> None: ...

    def run_failed(
        self, scenario_id: str, reason: str, run_dir: str | None
    ) -> None: ...
