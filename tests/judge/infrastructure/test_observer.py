"""Tests for StructlogJudgeObserver and CompositeJudgeObserver."""

import pytest
import structlog
from structlog.testing import capture_logs

from skill_eval.judge.infrastructure.observer import (
    CompositeJudgeObserver,
    StructlogJudgeObserver,
)
from tests.judge.fake_observer import FakeJudgeObserver


@pytest.fixture(autouse=True)
def _default_structlog() -> None:
    structlog.reset_defaults()


class TestStructlogJudgeObserver:
    def test_completed_scoring_is_logged_at_info(self) -> None:
        with capture_logs() as logs:
            StructlogJudgeObserver().judge_scoring_completed(
                scenario_id="s", domain="backend", score=42, max_score=50, duration_ms=7
            )
        assert logs == [
            {
                "event": "judge.scoring_completed",
                "log_level": "info",
                "scenario_id": "s",
                "domain": "backend",
                "score": 42,
                "max_score": 50,
                "duration_ms": 7,
            }
        ]

    def test_high_temperature_is_a_warning(self) -> None:
        with capture_logs() as logs:
            StructlogJudgeObserver().judge_high_temperature_warned(
                scenario_id="s", temperature=0.8
            )
        assert logs[0]["log_level"] == "warning"


class TestCompositeJudgeObserver:
    def test_fans_out_to_every_observer(self) -> None:
        first, second = FakeJudgeObserver(), FakeJudgeObserver()
        composite = CompositeJudgeObserver(observers=[first, second])

        composite.judge_scoring_started(scenario_id="s", domain="backend", model="m")
        composite.judge_scoring_failed(scenario_id="s", domain="backend", reason="r")

        for observer in (first, second):
            assert len(observer.scoring_started) == 1
            assert observer.scoring_failed[0].reason == "r"
