"""StructlogEvaluationObserver — production observer that delegates to structlog."""

import structlog


class StructlogEvaluationObserver:
    """Logs evaluation domain events to structlog.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self) -> None:
        self._log = structlog.get_logger()

    def run_started(self, scenario_id: str, kind: str, phases: list[str]) -> None:
        self._log.info(
            "evaluation.run_started",
            scenario_id=scenario_id,
            kind=kind,
            phases=phases,
        )

    def phase_started(self, scenario_id: str, phase: str) -> None:
        self._log.info(
            "evaluation.phase_started", scenario_id=scenario_id, phase=phase
        )

    def phase_completed(self, scenario_id: str, phase: str, duration_ms: int) -> None:
        self._log.info(
            "evaluation.phase_completed",
            scenario_id=scenario_id,
            phase=phase,
            duration_ms=duration_ms,
        )

    def run_completed(
        self,
        scenario_id: str,
        outcome: str,
        total_score: int,
        max_score: int,
        run_dir: str,
    ) -> None:
        self._log.info(
            "evaluation.run_completed",
            scenario_id=scenario_id,
            outcome=outcome,
            total_score=total_score,
            max_score=max_score,
            run_dir=run_dir,
        )

    def run_failed(self, scenario_id: str, reason: str, run_dir: str | None) -> None:
        self._log.error(
            "evaluation.run_failed",
            scenario_id=scenario_id,
            reason=reason,
            run_dir=run_dir,
        )
