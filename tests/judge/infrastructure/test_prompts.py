"""Tests for judge prompt construction and response unwrapping."""

from skill_eval.config.domain.rubric import DomainRubric
from skill_eval.judge.infrastructure.prompts import (
    build_domain_prompt,
    build_panel_prompt,
    unwrap_json_fence,
)

_BACKEND = DomainRubric(
    max_score=50,
    criteria="- models (0-25)\n- controllers (0-25)",
    context="Prefer SolidQueue for background work.",
)
_TESTS = DomainRubric(max_score=30, criteria="- coverage (0-30)")


class TestUnwrapJsonFence:
    def test_plain_json_is_returned_stripped(self) -> None:
        assert unwrap_json_fence('  {"score": 1}\n') == '{"score": 1}'

    def test_json_fence_is_removed(self) -> None:
        assert unwrap_json_fence('```json\n{"score": 1}\n```') == '{"score": 1}'

    def test_bare_fence_is_removed(self) -> None:
        assert unwrap_json_fence('```\n{"score": 1}\n```\n') == '{"score": 1}'

    def test_text_around_fence_is_left_alone(self) -> None:
        text = 'Here you go:\n```json\n{"score": 1}\n```'
        assert unwrap_json_fence(text) == text


class TestBuildDomainPrompt:
    def test_contains_every_section_in_order(self) -> None:
        prompt = build_domain_prompt(
            domain="backend",
            requirements="Plan user registration.",
            agent_output="1. Add a User model.",
            rubric=_BACKEND,
        )
        sections = [
            "## Scenario Requirements",
            "## Agent Output to Evaluate",
            "## Evaluation Criteria",
            "## Output Format",
        ]
        positions = [prompt.index(section) for section in sections]
        assert positions == sorted(positions)

    def test_includes_rubric_and_context(self) -> None:
        prompt = build_domain_prompt(
            domain="backend",
            requirements="Plan user registration.",
            agent_output="1. Add a User model.",
            rubric=_BACKEND,
        )
        assert "### backend (maximum 50 points)" in prompt
        assert "- controllers (0-25)" in prompt
        assert "#### backend reference context" in prompt
        assert "Prefer SolidQueue" in prompt
        assert "between 0 and 50" in prompt

    def test_omits_empty_context(self) -> None:
        prompt = build_domain_prompt(
            domain="tests", requirements="r", agent_output="o", rubric=_TESTS
        )
        assert "reference context" not in prompt


class TestBuildPanelPrompt:
    def test_lists_every_domain(self) -> None:
        prompt = build_panel_prompt(
            requirements="Plan user registration.",
            agent_output="1. Add a User model.",
            rubrics={"backend": _BACKEND, "tests": _TESTS},
        )
        assert "### backend (maximum 50 points)" in prompt
        assert "### tests (maximum 30 points)" in prompt
        assert "(backend, tests)" in prompt
