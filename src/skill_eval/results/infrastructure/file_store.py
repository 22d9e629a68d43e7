"""FileResultStore — writes one immutable artifact directory per run."""

import json
from collections.abc import Sequence
from pathlib import Path

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.evaluation.domain.summary import RunSummary
from skill_eval.judge.domain.judgment import Judgment
from skill_eval.results.domain.run_dir import run_dir_name
from skill_eval.results.infrastructure.errors import ResultStoreError
from skill_eval.results.infrastructure.markdown import (
    render_summary,
    render_transcript,
)


class FileResultStore:
    """Persists run artifacts under ``runs_dir``.

    Each run owns its directory exclusively, so no locking is needed here;
    ``mkdir(exist_ok=False)`` is the collision check.
    """

    def __init__(self, runs_dir: Path) -> None:
        self._runs_dir = runs_dir

    def persist_run(
        self,
        scenario_id: str,
        transcripts: Sequence[Transcript],
        judgments: Sequence[Judgment],
        summary: RunSummary,
    ) -> Path:
        """Create a new run directory and write every artifact into it.

        Raises:
            ResultStoreError: if the directory or any file cannot be written.
        """
        run_dir = self._create_run_dir(scenario_id, summary)
        try:
            for transcript in transcripts:
                (run_dir / f"{transcript.variant}_transcript.md").write_text(
                    render_transcript(transcript), encoding="utf-8"
                )
            for judgment in judgments:
                (run_dir / f"{judgment.domain}_judgment.json").write_text(
                    judgment.model_dump_json(indent=2), encoding="utf-8"
                )
            if summary.assertion_results:
                (run_dir / "assertions.json").write_text(
                    json.dumps(
                        [r.model_dump(mode="json") for r in summary.assertion_results],
                        indent=2,
                    ),
                    encoding="utf-8",
                )
            (run_dir / "summary.json").write_text(
                summary.model_dump_json(indent=2), encoding="utf-8"
            )
            (run_dir / "summary.md").write_text(
                render_summary(summary), encoding="utf-8"
            )
        except OSError as exc:
            raise ResultStoreError(path=run_dir, reason=str(exc)) from exc

        return run_dir

    def _create_run_dir(self, scenario_id: str, summary: RunSummary) -> Path:
        try:
            self._runs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ResultStoreError(path=self._runs_dir, reason=str(exc)) from exc

        attempt = 1
        while True:
            candidate = self._runs_dir / run_dir_name(
                scenario_id, summary.started_at, attempt
            )
            try:
                candidate.mkdir(exist_ok=False)
            except FileExistsError:
                attempt += 1
                continue
            except OSError as exc:
                raise ResultStoreError(path=candidate, reason=str(exc)) from exc
            return candidate
