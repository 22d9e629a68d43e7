"""CompositeEvaluationObserver — fans out all events to a list of observers."""

from skill_eval.evaluation.domain.observer import EvaluationObserver


class CompositeEvaluationObserver:
    """Delegates every observer event to each observer in order.

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, observers: list[EvaluationObserver]) -> None:
        self._observers = observers

    def run_started(self, scenario_id: str, kind: str, phases: list[str]) -> None:
        for obs in self._observers:
            obs.run_started(scenario_id=scenario_id, kind=kind, phases=phases)

    def phase_started(self, scenario_id: str, phase: str) -> None:
        for obs in self._observers:
            obs.phase_started(scenario_id=scenario_id, phase=phase)

    def phase_completed(self, scenario_id: str, phase: str, duration_ms: int) -> None:
        for obs in self._observers:
            obs.phase_completed(
                scenario_id=scenario_id, phase=phase, duration_ms=duration_ms
            )

    def run_completed(
        self,
        scenario_id: str,
        outcome: str,
        total_score: int,
        max_score: int,
        run_dir: str,
    ) -> None:
        for obs in self._observers:
            obs.run_completed(
                scenario_id=scenario_id,
                outcome=outcome,
                total_score=total_score,
                max_score=max_score,
                run_dir=run_dir,
            )

    def run_failed(self, scenario_id: str, reason: str, run_dir: str | None) -> None:
        for obs in self._observers:
            obs.run_failed(scenario_id=scenario_id, reason=reason, run_dir=run_dir)
