"""ResultStore and Ledger Protocols — persistence ports used by the runner."""

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.evaluation.domain.summary import RunSummary
from skill_eval.judge.domain.judgment import Judgment
from skill_eval.results.domain.ledger import LedgerEntry


class ResultStore(Protocol):
    """Writes one immutable directory of artifacts per run."""

    def persist_run(
        self,
        scenario_id: str,
        transcripts: Sequence[Transcript],
        judgments: Sequence[Judgment],
        summary: RunSummary,
    ) -> Path: ...


class Ledger(Protocol):
    """The cumulative, upsert-by-key results table."""

    def append_to_ledger(
        self, summary: RunSummary, run_dir: Path | None = None
    ) -> LedgerEntry: ...

    def entries(self) -> list[LedgerEntry]: ...
