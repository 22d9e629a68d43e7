"""Tests for StructlogAgentObserver and CompositeAgentObserver."""

import pytest
import structlog
from structlog.testing import capture_logs

from skill_eval.agent.infrastructure.observer import (
    CompositeAgentObserver,
    StructlogAgentObserver,
)
from tests.agent.fake_observer import FakeAgentObserver, TextReceivedEvent


@pytest.fixture(autouse=True)
def _default_structlog() -> None:
    structlog.reset_defaults()


class TestStructlogAgentObserver:
    def test_streamed_text_is_logged_as_length_at_debug(self) -> None:
        with capture_logs() as logs:
            StructlogAgentObserver().agent_text_received(
                scenario_id="s", variant="treatment", text="hello"
            )
        assert logs == [
            {
                "event": "agent.text_received",
                "log_level": "debug",
                "scenario_id": "s",
                "variant": "treatment",
                "chars": 5,
            }
        ]

    def test_failure_is_logged_at_error(self) -> None:
        with capture_logs() as logs:
            StructlogAgentObserver().agent_invocation_failed(
                scenario_id="s", variant="baseline", reason="timed out"
            )
        assert logs[0]["event"] == "agent.invocation_failed"
        assert logs[0]["log_level"] == "error"
        assert logs[0]["reason"] == "timed out"


class TestCompositeAgentObserver:
    def test_fans_out_to_every_observer(self) -> None:
        first, second = FakeAgentObserver(), FakeAgentObserver()
        composite = CompositeAgentObserver(observers=[first, second])

        composite.agent_text_received(scenario_id="s", variant="plan", text="x")
        composite.agent_invocation_failed(scenario_id="s", variant="plan", reason="r")

        for observer in (first, second):
            assert observer.text_received == [
                TextReceivedEvent(scenario_id="s", variant="plan", text="x")
            ]
            assert len(observer.invocation_failed) == 1
