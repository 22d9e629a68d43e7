"""JsonLedger — the cumulative results table, upserted by (scenario, branch)."""

import fcntl
import json
import os
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from pydantic import ValidationError

from skill_eval.evaluation.domain.summary import RunSummary
from skill_eval.results.domain.ledger import LedgerEntry, upsert_entries
from skill_eval.results.infrastructure.errors import ResultStoreError


class JsonLedger:
    """Single-writer ledger stored as a JSON array, plus an append-only history.

    Writers are serialised in-process by a lock and across processes by an
    exclusive flock on a sidecar ``.lock`` file. The table is rewritten to a
    temporary file and swapped in with ``os.replace`` so readers never see a
    partial write.
    """

    def __init__(self, ledger_path: Path, history_path: Path) -> None:
        self._ledger_path = ledger_path
        self._history_path = history_path
        self._lock_path = ledger_path.with_name(ledger_path.name + ".lock")
        self._thread_lock = threading.Lock()

    def append_to_ledger(
        self, summary: RunSummary, run_dir: Path | None = None
    ) -> LedgerEntry:
        """Upsert the entry for this run and append it to the history.

        Raises:
            ResultStoreError: if the ledger cannot be read or written.
        """
        entry = LedgerEntry.from_summary(
            summary, run_dir=str(run_dir) if run_dir is not None else None
        )
        with self._exclusive():
            entries = upsert_entries(self._read(), entry)
            self._write(entries)
            self._append_history(entry)
        return entry

    def entries(self) -> list[LedgerEntry]:
        """Return the current table; an absent ledger reads as empty."""
        return self._read()

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        try:
            self._ledger_path.parent.mkdir(parents=True, exist_ok=True)
            lock_file = self._lock_path.open("a")
        except OSError as exc:
            raise ResultStoreError(path=self._lock_path, reason=str(exc)) from exc

        with self._thread_lock, lock_file:
            fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)

    def _read(self) -> list[LedgerEntry]:
        try:
            raw = self._ledger_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise ResultStoreError(path=self._ledger_path, reason=str(exc)) from exc

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ResultStoreError(
                path=self._ledger_path, reason=f"invalid JSON: {exc}"
            ) from exc
        if not isinstance(data, list):
            raise ResultStoreError(
                path=self._ledger_path, reason="expected a JSON array of entries"
            )

        try:
            return [LedgerEntry.model_validate(item) for item in data]
        except ValidationError as exc:
            raise ResultStoreError(path=self._ledger_path, reason=str(exc)) from exc

    def _write(self, entries: list[LedgerEntry]) -> None:
        tmp_path = self._ledger_path.with_name(self._ledger_path.name + ".tmp")
        try:
            tmp_path.write_text(
                json.dumps([e.model_dump(mode="json") for e in entries], indent=2),
                encoding="utf-8",
            )
            os.replace(tmp_path, self._ledger_path)
        except OSError as exc:
            raise ResultStoreError(path=self._ledger_path, reason=str(exc)) from exc

    def _append_history(self, entry: LedgerEntry) -> None:
        try:
            with self._history_path.open("a", encoding="utf-8") as fh:
                fh.write(entry.model_dump_json() + "\n")
        except OSError as exc:
            raise ResultStoreError(path=self._history_path, reason=str(exc)) from exc
