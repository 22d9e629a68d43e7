"""ProgressEvaluationObserver — renders a Rich phase progress bar to stderr."""

from __future__ import annotations

from rich.console import Console
from rich.progress import (
    Progress,
    ProgressColumn,
    Task,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text


class _PhaseColumn(ProgressColumn):
    """Renders done+inflight/total phases with colors matching the bar segments."""

    def render(self, task: Task) -> Text:
        done = int(task.fields.get("done", 0))
        inflight = int(task.fields.get("inflight", 0))
        total = int(task.total or 0)
        return Text.assemble(
            (str(done), "bright_green"),
            ("+", "dim white"),
            (str(inflight), "grey50"),
            ("/", "dim white"),
            (str(total), "default"),
        )


class _ThreeSegmentBarColumn(ProgressColumn):
    """ProgressColumn that renders three segments: done, in-flight, remaining."""

    def __init__(self, bar_width: int = 40) -> None:
        super().__init__()
        self.bar_width = bar_width

    def render(self, task: Task) -> Text:
        bar_width = self.bar_width or 40
        total = task.total or 0
        if total > 0:
            done_cells = int(task.completed / total * bar_width)
            inflight = int(task.fields.get("inflight", 0))
            inflight_cells = min(
                int(inflight / total * bar_width),
                bar_width - done_cells,
            )
        else:
            done_cells = 0
            inflight_cells = 0
        remaining_cells = bar_width - done_cells - inflight_cells

        result = Text()
        result.append("█" * done_cells, style="bright_green")
        result.append("▒" * inflight_cells, style="grey50")
        result.append("░" * remaining_cells, style="dim white")
        return result


def _make_progress(console: Console) -> Progress:
    return Progress(
        TextColumn("{task.description}"),
        _ThreeSegmentBarColumn(bar_width=40),
        _PhaseColumn(),
        TimeElapsedColumn(),
        TextColumn("{task.fields[phase]}"),
        console=console,
        refresh_per_second=10,
        transient=False,
    )


class ProgressEvaluationObserver:
    """Renders one progress row per scenario run on stderr, advancing per phase.

    Pass ``disabled=True`` to suppress all terminal output (useful in tests and
    with ``--log-format json``).

    Does NOT inherit from EvaluationObserver (structural typing via Protocol).
    """

    def __init__(self, disabled: bool = False) -> None:
        self._disabled = disabled
        self._progress: Progress | None = None
        self._task_id: TaskID | None = None
        self._done = 0
        self._inflight = 0

    def _update(self, phase: str) -> None:
        if self._progress is None or self._task_id is None:
            return
        self._progress.update(
            self._task_id,
            completed=self._done,
            done=self._done,
            inflight=self._inflight,
            phase=phase,
        )

    def _stop(self) -> None:
        if self._progress is not None:
            self._progress.stop()
        self._progress = None
        self._task_id = None

    def run_started(self, scenario_id: str, kind: str, phases: list[str]) -> None:
        self._done = 0
        self._inflight = 0
        if self._disabled:
            return

        self._progress = _make_progress(console=Console(stderr=True))
        self._task_id = self._progress.add_task(
            description=f"[bold]{scenario_id}[/bold] ({kind})",
            total=float(len(phases)),
            done=0,
            inflight=0,
            phase="",
        )
        self._progress.start()

    def phase_started(self, scenario_id: str, phase: str) -> None:
        self._inflight = 1
        self._update(phase=phase)

    def phase_completed(self, scenario_id: str, phase: str, duration_ms: int) -> None:
        self._done += 1
        self._inflight = 0
        self._update(phase=phase)

    def run_completed(
        self,
        scenario_id: str,
        outcome: str,
        total_score: int,
        max_score: int,
        run_dir: str,
    ) -> None:
        self._update(phase=outcome)
        self._stop()

    def run_failed(self, scenario_id: str, reason: str, run_dir: str | None) -> None:
        self._inflight = 0
        self._update(phase="error")
        self._stop()
