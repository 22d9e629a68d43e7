"""LiveLog — append-only progress log that can be tailed while a run is in flight."""

from datetime import datetime
from pathlib import Path


class LiveLog:
    """Appends to ``live.log``, flushing after every write.

    The file is never truncated; each run starts with a banner line so that
    ``tail -f`` shows where one run ends and the next begins.
    """

    def __init__(self, path: Path) -> None:
        self._path = path
        self._path.parent.mkdir(parents=True, exist_ok=True)

    @property
    def path(self) -> Path:
        return self._path

    def line(self, message: str) -> None:
        stamp = datetime.now().strftime("%H:%M:%S")
        self._append(f"[{stamp}] {message}\n")

    def stream(self, text: str) -> None:
        """Append raw streamed text without a timestamp or added newline."""
        self._append(text)

    def _append(self, text: str) -> None:
        with self._path.open("a", encoding="utf-8") as fh:
            fh.write(text)
            fh.flush()


class LiveLogObserver:
    """Feeds agent, judge and evaluation events into the live log.

    Satisfies AgentObserver, JudgeObserver and EvaluationObserver structurally.
    """

    def __init__(self, live_log: LiveLog) -> None:
        self._log = live_log

    # agent events

    def agent_invocation_started(
        self, scenario_id: str, variant: str, model: str
    ) -> None:
        self._log.line(f"{scenario_id} [{variant}] invoking agent ({model})")

    def agent_text_received(self, scenario_id: str, variant: str, text: str) -> None:
        self._log.stream(text if text.endswith("\n") else text + "\n")

    def agent_invocation_completed(
        self,
        scenario_id: str,
        variant: str,
        duration_ms: int,
        num_turns: int | None,
        cost_usd: float | None,
    ) -> None:
        self._log.line(
            f"{scenario_id} [{variant}] agent finished in {duration_ms / 1000:.1f}s"
        )

    def agent_invocation_failed(
        self, scenario_id: str, variant: str, reason: str
    ) -> None:
        self._log.line(f"{scenario_id} [{variant}] ERROR: agent failed: {reason}")

    # judge events

    def judge_scoring_started(self, scenario_id: str, domain: str, model: str) -> None:
        self._log.line(f"{scenario_id} judging {domain} ({model})")

    def judge_scoring_completed(
        self,
        scenario_id: str,
        domain: str,
        score: int,
        max_score: int,
        duration_ms: int,
    ) -> None:
        self._log.line(f"{scenario_id} {domain}: {score}/{max_score}")

    def judge_scoring_failed(self, scenario_id: str, domain: str, reason: str) -> None:
        self._log.line(f"{scenario_id} ERROR: judge failed for {domain}: {reason}")

    def judge_high_temperature_warned(
        self, scenario_id: str, temperature: float
    ) -> None:
        self._log.line(
            f"{scenario_id} WARNING: judge temperature {temperature} is non-deterministic"
        )

    # evaluation events

    def run_started(self, scenario_id: str, kind: str, phases: list[str]) -> None:
        self._log.stream("\n" + "=" * 72 + "\n")
        self._log.line(f"{scenario_id} started ({kind}): {' -> '.join(phases)}")

    def phase_started(self, scenario_id: str, phase: str) -> None:
        self._log.line(f"{scenario_id} phase {phase} started")

    def phase_completed(self, scenario_id: str, phase: str, duration_ms: int) -> None:
        self._log.line(
            f"{scenario_id} phase {phase} completed in {duration_ms / 1000:.1f}s"
        )

    def run_completed(
        self,
        scenario_id: str,
        outcome: str,
        total_score: int,
        max_score: int,
        run_dir: str,
    ) -> None:
        self._log.line(f"{scenario_id} {outcome.upper()} -> {run_dir}")

    def run_failed(self, scenario_id: str, reason: str, run_dir: str | None) -> None:
        where = f" -> {run_dir}" if run_dir else ""
        self._log.line(f"{scenario_id} ERROR: {reason}{where}")
