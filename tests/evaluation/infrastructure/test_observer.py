"""Tests for StructlogEvaluationObserver."""

import pytest
import structlog
from structlog.testing import capture_logs

from skill_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver


@pytest.fixture(autouse=True)
def _default_structlog() -> None:
    structlog.reset_defaults()


class TestStructlogEvaluationObserver:
    def test_run_completed_is_logged_at_info(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().run_completed(
                scenario_id="s", outcome="pass", total_score=0, max_score=0, run_dir="/r"
            )
        assert logs == [
            {
                "event": "evaluation.run_completed",
                "log_level": "info",
                "scenario_id": "s",
                "outcome": "pass",
                "total_score": 0,
                "max_score": 0,
                "run_dir": "/r",
            }
        ]

    def test_run_failed_is_logged_at_error(self) -> None:
        with capture_logs() as logs:
            StructlogEvaluationObserver().run_failed(
                scenario_id="s", reason="timed out", run_dir=None
            )
        assert logs[0]["event"] == "evaluation.run_failed"
        assert logs[0]["log_level"] == "error"
