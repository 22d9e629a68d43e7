"""Error types raised by scenario infrastructure."""

from pathlib import Path

from skill_eval.core.errors import SkillEvalError


class MalformedScenarioError(SkillEvalError):
    """Raised when a scenario file's header, prompt or assertions cannot be parsed."""

    def __init__(self, source: str, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(f"Failed to parse scenario '{source}': {reason}")


class ScenarioNotFoundError(SkillEvalError):
    """Raised when a named scenario has no file in the scenarios directory."""

    def __init__(self, name: str, scenarios_dir: Path) -> None:
        self.name = name
        super().__init__(
            f"Failed to find scenario: '{name}' not found in {scenarios_dir}"
        )


class KnowledgeModuleNotFoundError(SkillEvalError):
    """Raised when a knowledge module reference resolves to no file."""

    def __init__(self, reference: str, skills_dir: Path) -> None:
        self.reference = reference
        super().__init__(
            f"Failed to load knowledge module: '{reference}' not found in {skills_dir}"
        )
