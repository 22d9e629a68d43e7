"""Error types raised by result persistence."""

from pathlib import Path

from skill_eval.core.errors import SkillEvalError


class ResultStoreError(SkillEvalError):
    """Raised when run artifacts or the ledger cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to persist results at '{path}': {reason}")
