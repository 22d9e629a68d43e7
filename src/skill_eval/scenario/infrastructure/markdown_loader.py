"""Markdown scenario format — parse a scenario file into a Scenario and back.

Format::

    # Optional title
    id: jobs-deliver-later
    skill: rails-ai:jobs

    ## Scenario
    ```
    <literal prompt>
    ```

    ## Expected Baseline Behavior
    <documentation only>

    ## Expected Treatment Behavior
    <documentation only>

    ## Assertions
    Must include:
    - `deliver_later`
    - SolidQueue
"""

import re
from dataclasses import dataclass, field
from pathlib import Path

from pydantic import ValidationError

from skill_eval.core.names import is_safe_name
from skill_eval.scenario.domain.scenario import Scenario
from skill_eval.scenario.infrastructure.errors import MalformedScenarioError

_META_PATTERN = re.compile(r"^([A-Za-z0-9_-]+):(.*)$")
_FENCE_PATTERN = re.compile(r"^\s*(`{3,}|~{3,})")
_SECTION_PREFIX = "## "
_MUST_INCLUDE = "must include:"

_SCENARIO = "scenario"
_EXPECTED_BASELINE = ("expected baseline behavior", "expected baseline")
_EXPECTED_TREATMENT = ("expected treatment behavior", "expected treatment")
_ASSERTIONS = "assertions"

_CONTEXT_KEYS = ("skill", "context")


@dataclass
class _Section:
    name: str
    lines: list[str] = field(default_factory=list)


def load_scenario(path: Path) -> Scenario:
    """Read and parse one scenario file; the file stem is the default id.

    Raises:
        MalformedScenarioError: if the file cannot be read, or its metadata
            header, prompt or assertions cannot be parsed.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MalformedScenarioError(source=str(path), reason=str(exc)) from exc
    return parse_scenario(text=text, default_id=path.stem, source=str(path))


def parse_scenario(text: str, default_id: str, source: str | None = None) -> Scenario:
    """Parse scenario markdown into an immutable Scenario.

    Raises:
        MalformedScenarioError: on any structural problem.
    """
    origin = source or default_id
    lines = text.splitlines()

    title, metadata, body_start = _parse_header(lines=lines, origin=origin)
    sections = _split_sections(lines=lines[body_start:], origin=origin)

    scenario_section = sections.get(_SCENARIO)
    if scenario_section is None:
        raise MalformedScenarioError(origin, "missing '## Scenario' section")
    prompt = _extract_prompt(lines=scenario_section.lines, origin=origin)

    assertions: tuple[str, ...] = ()
    assertions_section = sections.get(_ASSERTIONS)
    if assertions_section is not None:
        assertions = _parse_assertions(lines=assertions_section.lines, origin=origin)

    scenario_id = metadata.pop("id", default_id)
    context = _pop_context(metadata=metadata, origin=origin)
    domains = _parse_domains(metadata.pop("domains", ""))

    if not is_safe_name(scenario_id):
        raise MalformedScenarioError(
            origin,
            f"id {scenario_id!r} must start with a letter or digit and contain only "
            "letters, digits, '_', '.' or '-'",
        )
    for domain in domains:
        if not is_safe_name(domain):
            raise MalformedScenarioError(origin, f"invalid domain name {domain!r}")

    if assertions and context is None:
        raise MalformedScenarioError(
            origin,
            "scenario has assertions but no 'skill' metadata to inject as treatment",
        )

    try:
        return Scenario(
            id=scenario_id,
            title=title,
            prompt=prompt,
            context=context,
            assertions=assertions,
            expected_baseline=_section_text(sections, _EXPECTED_BASELINE),
            expected_treatment=_section_text(sections, _EXPECTED_TREATMENT),
            domains=domains,
            metadata=metadata,
        )
    except ValidationError as exc:
        raise MalformedScenarioError(origin, str(exc)) from exc


def render_scenario(scenario: Scenario) -> str:
    """Serialise a Scenario back into the markdown format it was parsed from."""
    out: list[str] = []
    if scenario.title:
        out += [f"# {scenario.title}", ""]

    out.append(f"id: {scenario.id}")
    if scenario.context is not None:
        out.append(f"skill: {scenario.context}")
    if scenario.domains:
        out.append(f"domains: {', '.join(scenario.domains)}")
    for key, value in scenario.metadata.items():
        out.append(f"{key}: {value}")

    fence = _fence_for(scenario.prompt)
    out += ["", "## Scenario", "", fence, scenario.prompt, fence]

    if scenario.expected_baseline:
        out += ["", "## Expected Baseline Behavior", "", scenario.expected_baseline]
    if scenario.expected_treatment:
        out += ["", "## Expected Treatment Behavior", "", scenario.expected_treatment]

    if scenario.assertions:
        out += ["", "## Assertions", "", "Must include:"]
        out += [f"- {_quote(assertion)}" for assertion in scenario.assertions]

    return "\n".join(out) + "\n"


def _parse_header(lines: list[str], origin: str) -> tuple[str | None, dict[str, str], int]:
    """Consume the title and key/value header up to the first section heading."""
    title: str | None = None
    metadata: dict[str, str] = {}

    index = 0
    for index, line in enumerate(lines):
        if line.startswith(_SECTION_PREFIX):
            break
        stripped = line.strip()
        if not stripped or stripped == "---":
            continue
        if stripped.startswith("# ") and title is None and not metadata:
            title = stripped[2:].strip() or None
            continue

        match = _META_PATTERN.match(stripped)
        if match is None:
            raise MalformedScenarioError(
                origin, f"line {index + 1}: expected 'key: value' metadata, got {stripped!r}"
            )
        key, value = match.group(1).lower(), match.group(2).strip()
        if not value:
            raise MalformedScenarioError(origin, f"metadata key '{key}' has no value")
        if key in metadata:
            raise MalformedScenarioError(origin, f"duplicate metadata key '{key}'")
        metadata[key] = value
    else:
        index = len(lines)

    if not metadata:
        raise MalformedScenarioError(origin, "missing metadata header")
    return title, metadata, index


def _split_sections(lines: list[str], origin: str) -> dict[str, _Section]:
    """Group body lines under their '## ' heading, ignoring headings inside fences."""
    sections: dict[str, _Section] = {}
    current: _Section | None = None
    open_fence: str | None = None

    for line in lines:
        if open_fence is None and line.startswith(_SECTION_PREFIX):
            name = " ".join(line[len(_SECTION_PREFIX) :].split()).lower()
            current = sections.setdefault(name, _Section(name=name))
            continue

        open_fence = _track_fence(line=line, open_fence=open_fence)
        if current is not None:
            current.lines.append(line)

    if open_fence is not None:
        raise MalformedScenarioError(origin, "unterminated code fence")
    return sections


def _track_fence(line: str, open_fence: str | None) -> str | None:
    """Return the fence marker still open after ``line``."""
    match = _FENCE_PATTERN.match(line)
    if match is None:
        return open_fence
    marker = match.group(1)
    if open_fence is None:
        return marker
    if _closes(line=line, open_fence=open_fence):
        return None
    return open_fence


def _closes(line: str, open_fence: str) -> bool:
    stripped = line.strip()
    return (
        len(stripped) >= len(open_fence)
        and set(stripped) == {open_fence[0]}
    )


def _extract_prompt(lines: list[str], origin: str) -> str:
    """Return the prompt held by the Scenario section.

    When the whole section is one fenced block its content is taken verbatim;
    otherwise the stripped section text (which may embed code blocks) is used.
    """
    body = "\n".join(lines).strip()
    if not body:
        raise MalformedScenarioError(origin, "scenario prompt is empty")

    body_lines = body.splitlines()
    match = _FENCE_PATTERN.match(body_lines[0])
    if match is not None:
        marker = match.group(1)
        for end in range(1, len(body_lines)):
            if _closes(line=body_lines[end], open_fence=marker):
                if end == len(body_lines) - 1:
                    prompt = "\n".join(body_lines[1:end])
                    if not prompt.strip():
                        raise MalformedScenarioError(origin, "scenario prompt is empty")
                    return prompt
                break
    return body


def _parse_assertions(lines: list[str], origin: str) -> tuple[str, ...]:
    """Parse the 'Must include:' bullet list, collapsing duplicates in order."""
    marker_index: int | None = None
    for index, line in enumerate(lines):
        if line.strip().strip("*").strip().lower() == _MUST_INCLUDE:
            marker_index = index
            break
    if marker_index is None:
        raise MalformedScenarioError(origin, "assertions section has no 'Must include:' list")

    assertions: list[str] = []
    for line in lines[marker_index + 1 :]:
        stripped = line.strip()
        if not stripped:
            continue
        if not stripped.startswith(("- ", "* ")):
            break
        text = _unquote(stripped[2:].strip())
        if not text:
            raise MalformedScenarioError(origin, "empty assertion bullet")
        if text not in assertions:
            assertions.append(text)

    if not assertions:
        raise MalformedScenarioError(origin, "'Must include:' list has no bullets")
    return tuple(assertions)


def _unquote(text: str) -> str:
    """Strip one pair of surrounding quotes that enclose the whole bullet."""
    for quote in ("`", '"'):
        inner = text[1:-1]
        if (
            len(text) >= 2
            and text.startswith(quote)
            and text.endswith(quote)
            and quote not in inner
        ):
            return inner
    return text


def _quote(assertion: str) -> str:
    for quote in ("`", '"'):
        if quote not in assertion:
            return f"{quote}{assertion}{quote}"
    # Holds both quote characters, so parsing leaves it untouched.
    return assertion


def _pop_context(metadata: dict[str, str], origin: str) -> str | None:
    present = [key for key in _CONTEXT_KEYS if key in metadata]
    if len(present) > 1:
        raise MalformedScenarioError(
            origin, "metadata declares both 'skill' and 'context'; use one"
        )
    return metadata.pop(present[0]) if present else None


def _parse_domains(raw: str) -> tuple[str, ...]:
    domains: list[str] = []
    for part in raw.split(","):
        name = part.strip().lower()
        if name and name not in domains:
            domains.append(name)
    return tuple(domains)


def _section_text(sections: dict[str, _Section], names: tuple[str, ...]) -> str | None:
    for name in names:
        section = sections.get(name)
        if section is not None:
            text = "\n".join(section.lines).strip()
            return text or None
    return None


def _fence_for(prompt: str) -> str:
    """Pick a backtick fence longer than any backtick run opening a prompt line."""
    longest = 0
    for line in prompt.splitlines():
        match = re.match(r"^\s*(`+)", line)
        if match:
            longest = max(longest, len(match.group(1)))
    return "`" * max(3, longest + 1)
