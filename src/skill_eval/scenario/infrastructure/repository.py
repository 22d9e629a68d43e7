"""ScenarioRepository — locates scenario files by name in the scenarios directory."""

from pathlib import Path

from skill_eval.scenario.domain.scenario import Scenario
from skill_eval.scenario.infrastructure.errors import ScenarioNotFoundError
from skill_eval.scenario.infrastructure.markdown_loader import load_scenario

_SUFFIX = ".md"


class ScenarioRepository:
    """Maps scenario names (file stems) to files under one directory.

    There is intentionally no "load all" operation: callers name the scenario
    they want to run.
    """

    def __init__(self, scenarios_dir: Path) -> None:
        self._scenarios_dir = scenarios_dir

    def list_names(self) -> list[str]:
        if not self._scenarios_dir.is_dir():
            return []
        return sorted(
            path.stem
            for path in self._scenarios_dir.glob(f"*{_SUFFIX}")
            if path.is_file() and not path.name.startswith(("_", "."))
        )

    def path_for(self, name: str) -> Path:
        """Return the file for ``name`` (with or without the .md suffix).

        Raises:
            ScenarioNotFoundError: if no such file exists.
        """
        stem = name.removesuffix(_SUFFIX)
        path = self._scenarios_dir / f"{stem}{_SUFFIX}"
        if not path.is_file():
            raise ScenarioNotFoundError(name=name, scenarios_dir=self._scenarios_dir)
        return path

    def load(self, name: str) -> Scenario:
        """Raises ScenarioNotFoundError or MalformedScenarioError."""
        return load_scenario(self.path_for(name))
