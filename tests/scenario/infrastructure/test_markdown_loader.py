"""Tests for the markdown scenario format."""

import random
from pathlib import Path

import pytest

from skill_eval.scenario.domain.scenario import Scenario, ScenarioKind
from skill_eval.scenario.infrastructure.errors import MalformedScenarioError
from skill_eval.scenario.infrastructure.markdown_loader import (
    load_scenario,
    parse_scenario,
    render_scenario,
)

# __file__ is tests/scenario/infrastructure/test_markdown_loader.py
SCENARIOS = Path(__file__).parent.parent.parent / "fixtures" / "scenarios"

_DIFFERENTIAL = """\
# Mailer
id: mailer-basic
skill: rails-ai:jobs

## Scenario

```
Send a welcome email after signup.
```

## Assertions

Must include:
- `deliver_later`
- SolidQueue
"""


class TestDifferentialScenario:
    def test_loads_fixture(self) -> None:
        scenario = load_scenario(SCENARIOS / "mailer-deliver-later.md")

        assert scenario.id == "mailer-deliver-later"
        assert scenario.title == "Welcome email is sent in the background"
        assert scenario.context == "rails-ai:solid-queue"
        assert scenario.kind is ScenarioKind.DIFFERENTIAL
        assert scenario.metadata == {"category": "jobs"}

    def test_fenced_prompt_is_verbatim(self) -> None:
        scenario = load_scenario(SCENARIOS / "mailer-deliver-later.md")
        assert scenario.prompt == (
            "Add a welcome email that is sent when a user signs up. Keep the signup\n"
            "request fast."
        )

    def test_assertions_are_unquoted_and_deduplicated_in_order(self) -> None:
        scenario = load_scenario(SCENARIOS / "mailer-deliver-later.md")
        assert scenario.assertions == ("deliver_later", "SolidQueue", "background")

    def test_expected_sections_are_documentation(self) -> None:
        scenario = load_scenario(SCENARIOS / "mailer-deliver-later.md")
        assert scenario.expected_baseline is not None
        assert "deliver_now" in scenario.expected_baseline
        assert scenario.expected_treatment is not None
        assert "SolidQueue" in scenario.expected_treatment

    def test_assertions_without_skill_are_malformed(self) -> None:
        text = _DIFFERENTIAL.replace("skill: rails-ai:jobs\n", "")
        with pytest.raises(MalformedScenarioError, match="no 'skill' metadata"):
            parse_scenario(text, default_id="mailer-basic")


class TestJudgedScenario:
    def test_loads_fixture(self) -> None:
        scenario = load_scenario(SCENARIOS / "user-registration-plan.md")

        assert scenario.kind is ScenarioKind.JUDGED
        assert scenario.domains == ("backend", "security")
        assert scenario.context is None
        assert scenario.assertions == ()

    def test_unfenced_prompt_keeps_embedded_code_block(self) -> None:
        scenario = load_scenario(SCENARIOS / "user-registration-plan.md")
        assert scenario.prompt.startswith("Plan a user registration feature")
        assert "class User < ApplicationRecord" in scenario.prompt
        assert scenario.prompt.endswith("```")


class TestHeader:
    def test_file_stem_is_default_id(self) -> None:
        text = _DIFFERENTIAL.replace("id: mailer-basic\n", "")
        scenario = parse_scenario(text, default_id="from-stem")
        assert scenario.id == "from-stem"

    def test_context_key_is_accepted_as_alias_for_skill(self) -> None:
        text = _DIFFERENTIAL.replace("skill:", "context:")
        assert parse_scenario(text, default_id="x").context == "rails-ai:jobs"

    def test_both_skill_and_context_are_malformed(self) -> None:
        text = _DIFFERENTIAL.replace(
            "skill: rails-ai:jobs\n", "skill: rails-ai:jobs\ncontext: other\n"
        )
        with pytest.raises(MalformedScenarioError, match="both 'skill' and 'context'"):
            parse_scenario(text, default_id="x")

    def test_non_metadata_header_line_is_malformed(self) -> None:
        with pytest.raises(MalformedScenarioError, match="expected 'key: value'"):
            load_scenario(SCENARIOS / "broken-header.md")

    def test_duplicate_key_is_malformed(self) -> None:
        text = _DIFFERENTIAL.replace("id: mailer-basic\n", "id: a\nid: b\n")
        with pytest.raises(MalformedScenarioError, match="duplicate metadata key"):
            parse_scenario(text, default_id="x")

    def test_missing_header_is_malformed(self) -> None:
        text = "## Scenario\n\nDo it.\n"
        with pytest.raises(MalformedScenarioError, match="missing metadata header"):
            parse_scenario(text, default_id="x")

    def test_domains_are_lowercased_and_deduplicated(self) -> None:
        text = "id: x\ndomains: Backend, tests, backend\n\n## Scenario\n\nPlan it.\n"
        assert parse_scenario(text, default_id="x").domains == ("backend", "tests")


class TestBody:
    def test_missing_scenario_section_is_malformed(self) -> None:
        with pytest.raises(MalformedScenarioError, match="missing '## Scenario'"):
            parse_scenario("id: x\n\n## Assertions\n", default_id="x")

    def test_empty_prompt_is_malformed(self) -> None:
        with pytest.raises(MalformedScenarioError, match="prompt is empty"):
            parse_scenario("id: x\n\n## Scenario\n\n```\n\n```\n", default_id="x")

    def test_unterminated_fence_is_malformed(self) -> None:
        with pytest.raises(MalformedScenarioError, match="unterminated code fence"):
            parse_scenario("id: x\n\n## Scenario\n\n```\nno end\n", default_id="x")

    def test_heading_inside_fence_stays_in_prompt(self) -> None:
        text = "id: x\n\n## Scenario\n\n```\n## Not a section\nbody\n```\n"
        assert parse_scenario(text, default_id="x").prompt == "## Not a section\nbody"

    def test_assertions_without_must_include_are_malformed(self) -> None:
        text = _DIFFERENTIAL.replace("Must include:\n", "")
        with pytest.raises(MalformedScenarioError, match="no 'Must include:' list"):
            parse_scenario(text, default_id="x")

    def test_must_include_without_bullets_is_malformed(self) -> None:
        text = _DIFFERENTIAL.split("Must include:")[0] + "Must include:\n"
        with pytest.raises(MalformedScenarioError, match="has no bullets"):
            parse_scenario(text, default_id="x")

    def test_bold_must_include_marker_is_accepted(self) -> None:
        text = _DIFFERENTIAL.replace("Must include:", "**Must include:**")
        assert parse_scenario(text, default_id="x").assertions == (
            "deliver_later",
            "SolidQueue",
        )

    def test_bullet_with_several_code_spans_keeps_its_backticks(self) -> None:
        text = _DIFFERENTIAL.replace(
            "- `deliver_later`", "- `perform_later` and `deliver_later`"
        )
        assert parse_scenario(text, default_id="x").assertions[0] == (
            "`perform_later` and `deliver_later`"
        )

    def test_backticked_quotes_keep_the_inner_quotes(self) -> None:
        text = _DIFFERENTIAL.replace("- `deliver_later`", '- `"background"`')
        assert parse_scenario(text, default_id="x").assertions[0] == '"background"'

    @pytest.mark.parametrize("bad_id", ["jobs/deliver-later", "..", ".hidden", "a b"])
    def test_id_unusable_as_directory_name_is_malformed(self, bad_id: str) -> None:
        text = _DIFFERENTIAL.replace("id: mailer-basic", f"id: {bad_id}")
        with pytest.raises(MalformedScenarioError, match="must start with a letter"):
            parse_scenario(text, default_id="x")

    def test_stem_unusable_as_directory_name_is_malformed(self) -> None:
        text = _DIFFERENTIAL.replace("id: mailer-basic\n", "")
        with pytest.raises(MalformedScenarioError, match="must start with a letter"):
            parse_scenario(text, default_id="_draft")

    def test_domain_with_path_separator_is_malformed(self) -> None:
        text = "id: plan\ndomains: backend, ../etc\n\n## Scenario\n\nPlan it.\n"
        with pytest.raises(MalformedScenarioError, match="invalid domain name"):
            parse_scenario(text, default_id="x")

    def test_error_carries_source_and_reason(self) -> None:
        with pytest.raises(MalformedScenarioError) as exc_info:
            parse_scenario("id: x\n", default_id="x", source="scenarios/x.md")
        assert exc_info.value.source == "scenarios/x.md"
        assert "Scenario" in exc_info.value.reason


# ---------------------------------------------------------------------------
# Parse/render idempotence
# ---------------------------------------------------------------------------

_WORDS = ["deliver_later", "SolidQueue", "## heading", "```ruby", "~~~", "x: y", "`tick`"]
_ASSERTION_WORDS = [
    "deliver_later",
    "SolidQueue",
    "`perform_later` and `deliver_later`",
    '"background"',
    'say "hi" via `mail`',
]


def _random_scenario(rng: random.Random, index: int) -> Scenario:
    prompt_lines = [
        " ".join(rng.choice(_WORDS) for _ in range(rng.randint(1, 4)))
        for _ in range(rng.randint(1, 5))
    ]
    prompt = "\n".join(prompt_lines)
    if not prompt.strip():
        prompt = "Plan it."
    differential = rng.random() < 0.5
    assertions = tuple(rng.sample(_ASSERTION_WORDS, rng.randint(1, 4)))
    return Scenario(
        id=f"generated-{index}",
        title=rng.choice([None, f"Generated {index}"]),
        prompt=prompt,
        context="rails-ai:jobs" if differential else None,
        assertions=assertions if differential else (),
        expected_baseline=rng.choice([None, "Calls deliver_now inline."]),
        domains=() if differential else rng.choice([(), ("backend", "tests")]),
        metadata=rng.choice([{}, {"category": "jobs"}]),
    )


class TestRoundTrip:
    def test_fixture_render_then_parse_is_identity(self) -> None:
        scenario = load_scenario(SCENARIOS / "mailer-deliver-later.md")
        again = parse_scenario(render_scenario(scenario), default_id="ignored")
        assert again == scenario

    def test_parse_render_parse_is_idempotent(self) -> None:
        rng = random.Random(20250115)
        for index in range(200):
            scenario = _random_scenario(rng, index)
            once = parse_scenario(render_scenario(scenario), default_id="ignored")
            twice = parse_scenario(render_scenario(once), default_id="ignored")
            assert once == scenario
            assert twice == once
