"""Git revision detection for labelling runs and keying the ledger."""

import subprocess
from pathlib import Path

from skill_eval.evaluation.domain.summary import GitRevision

_UNKNOWN = "unknown"


def _git(args: list[str], cwd: Path) -> str:
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=5,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired):
        return _UNKNOWN
    if completed.returncode != 0:
        return _UNKNOWN
    return completed.stdout.strip() or _UNKNOWN


def detect_git_revision(cwd: Path) -> GitRevision:
    """Return the short HEAD sha and current branch, ``unknown`` where unavailable."""
    return GitRevision(
        sha=_git(["rev-parse", "--short", "HEAD"], cwd),
        branch=_git(["branch", "--show-current"], cwd),
    )
