"""Prompt construction for domain and panel judges."""

import re

from skill_eval.config.domain.rubric import DomainRubric

SYSTEM_PROMPT = """\
You are an expert reviewer evaluating an implementation plan produced by an AI \
coding agent. Score the plan strictly against the evaluation criteria you are \
given. Award points only for what the plan actually contains; do not reward \
intent that is not written down.

Report a critical blocker only for a defect that would make the plan unsafe or \
unshippable as written (for example a security hole or missing data integrity \
constraint). A critical blocker fails the evaluation regardless of score, so \
leave the list empty when there is none.

Respond with JSON only: no markdown fences and no prose outside the object.
"""

_DOMAIN_OUTPUT_CONTRACT = """\
Provide your evaluation as a JSON object with these keys:

- criteria_scores: object mapping each criterion name to its integer score
- score: integer total for this domain, between 0 and {max_score}
- issues: list of strings, each a concrete problem found in the plan
- suggestions: list of strings, at most 10 brief improvement suggestions
- critical_blockers: list of strings, empty when there is no critical blocker
"""

_PANEL_OUTPUT_CONTRACT = """\
Provide your evaluation as a JSON object with a single key "domains" mapping \
each domain name ({domain_names}) to an object with these keys:

- criteria_scores: object mapping each criterion name to its integer score
- score: integer total for that domain, between 0 and the domain's maximum
- issues: list of strings, each a concrete problem found in the plan
- suggestions: list of strings, at most 10 brief improvement suggestions
- critical_blockers: list of strings, empty when there is no critical blocker
"""

_FENCE_PATTERN = re.compile(r"^```[A-Za-z]*\s*\n(.*?)\n?```\s*$", re.DOTALL)


def unwrap_json_fence(text: str) -> str:
    """Strip a surrounding ```json fence from a model response, if present."""
    stripped = text.strip()
    match = _FENCE_PATTERN.match(stripped)
    if match is None:
        return stripped
    return match.group(1).strip()


def _domain_block(domain: str, rubric: DomainRubric) -> str:
    block = (
        f"### {domain} (maximum {rubric.max_score} points)\n\n"
        f"{rubric.criteria.strip()}\n"
    )
    if rubric.context.strip():
        block += f"\n#### {domain} reference context\n\n{rubric.context.strip()}\n"
    return block


def build_domain_prompt(
    domain: str, requirements: str, agent_output: str, rubric: DomainRubric
) -> str:
    """Build the user message for a single-domain judge call."""
    return (
        f"You are evaluating an implementation plan for the {domain} domain.\n\n"
        f"## Scenario Requirements\n\n{requirements.strip()}\n\n"
        f"## Agent Output to Evaluate\n\n{agent_output.strip()}\n\n"
        f"## Evaluation Criteria\n\n{_domain_block(domain, rubric)}\n"
        f"## Output Format\n\n"
        f"{_DOMAIN_OUTPUT_CONTRACT.format(max_score=rubric.max_score)}"
    )


def build_panel_prompt(
    requirements: str, agent_output: str, rubrics: dict[str, DomainRubric]
) -> str:
    """Build the user message for a delegated call covering every domain."""
    blocks = "\n".join(
        _domain_block(domain, rubric) for domain, rubric in rubrics.items()
    )
    domain_names = ", ".join(rubrics)
    return (
        f"You are evaluating an implementation plan for these domains: "
        f"{domain_names}.\n\n"
        f"## Scenario Requirements\n\n{requirements.strip()}\n\n"
        f"## Agent Output to Evaluate\n\n{agent_output.strip()}\n\n"
        f"## Evaluation Criteria\n\n{blocks}\n"
        f"## Output Format\n\n"
        f"{_PANEL_OUTPUT_CONTRACT.format(domain_names=domain_names)}"
    )
