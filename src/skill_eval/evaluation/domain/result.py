"""RunResult — what ScenarioRunner returns for a completed run."""

from pathlib import Path

from pydantic import BaseModel

from skill_eval.evaluation.domain.summary import RunSummary


class RunResult(BaseModel, frozen=True):
    summary: RunSummary
    run_dir: Path
