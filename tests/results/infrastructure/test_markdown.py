"""Tests for markdown rendering of run artifacts."""

from datetime import UTC, datetime

from skill_eval.agent.domain.transcript import Transcript, Variant
from skill_eval.evaluation.domain.summary import RunOutcome
from skill_eval.results.infrastructure.markdown import render_summary, render_transcript
from tests.results.summaries import differential_summary, judged_summary


class TestRenderSummary:
    def test_blockers_come_before_score(self) -> None:
        text = render_summary(
            judged_summary(
                scores={"backend": 42, "frontend": 38, "tests": 45, "security": 10},
                blockers={"security": ("missing foreign key constraint",)},
            )
        )
        assert text.index("missing foreign key constraint") < text.index("67.5%")
        assert "**FAIL**" in text
        assert "Under threshold: security" in text

    def test_differential_lists_assertions(self) -> None:
        text = render_summary(differential_summary())
        assert "| `SolidQueue` | found | found | baseline_contaminated |" in text
        assert "| `deliver_later` | absent | found | ok |" in text
        assert "## Score" not in text

    def test_error_section(self) -> None:
        text = render_summary(
            differential_summary(
                outcome=RunOutcome.ERROR,
                error_kind="InvocationTimeoutError",
            )
        )
        assert "## Error" in text
        assert "`InvocationTimeoutError`: Failed to invoke agent" in text


class TestRenderTranscript:
    def test_includes_metadata_and_text(self) -> None:
        text = render_transcript(
            Transcript(
                scenario_id="mailer",
                variant=Variant.TREATMENT,
                text="Use deliver_later.\n",
                captured_at=datetime(2025, 1, 15, 10, 30, tzinfo=UTC),
                duration_ms=1200,
                num_turns=2,
                cost_usd=0.0123,
            )
        )
        assert text.startswith("# mailer: treatment transcript")
        assert "- Turns: 2" in text
        assert "- Cost: $0.0123" in text
        assert text.endswith("Use deliver_later.\n")
