"""Storage configuration model — where scenarios, skills and results live."""

from pathlib import Path

from pydantic import BaseModel


class StorageConfig(BaseModel, frozen=True):
    scenarios_dir: Path
    skills_dir: Path
    results_dir: Path

    @property
    def ledger_path(self) -> Path:
        return self.results_dir / "ledger.json"

    @property
    def history_path(self) -> Path:
        return self.results_dir / "history.jsonl"

    @property
    def live_log_path(self) -> Path:
        return self.results_dir / "live.log"

    @property
    def runs_dir(self) -> Path:
        return self.results_dir / "runs"
