"""FileKnowledgeModuleLoader — reads knowledge modules (skills) from disk."""

from pathlib import Path

from skill_eval.scenario.domain.knowledge import KnowledgeModule
from skill_eval.scenario.infrastructure.errors import KnowledgeModuleNotFoundError

_SKILL_FILE = "SKILL.md"


class FileKnowledgeModuleLoader:
    """Resolves a reference such as ``rails-ai:jobs`` or ``jobs`` under skills_dir.

    Lookup order: ``<name>/SKILL.md``, ``<name>.md``, then ``<name>`` as a
    plain file path relative to skills_dir. A ``namespace:`` prefix is dropped
    before resolving. The file content is returned untouched.
    """

    def __init__(self, skills_dir: Path) -> None:
        self._skills_dir = skills_dir

    def load(self, reference: str) -> KnowledgeModule:
        """Raises KnowledgeModuleNotFoundError if no candidate file exists."""
        for candidate in self._candidates(reference=reference):
            if candidate.is_file():
                return KnowledgeModule(
                    reference=reference,
                    text=candidate.read_text(encoding="utf-8"),
                )
        raise KnowledgeModuleNotFoundError(
            reference=reference, skills_dir=self._skills_dir
        )

    def _candidates(self, reference: str) -> list[Path]:
        name = reference.split(":", 1)[-1].strip()
        if not name:
            return []
        return [
            self._skills_dir / name / _SKILL_FILE,
            self._skills_dir / f"{name}.md",
            self._skills_dir / name,
        ]
