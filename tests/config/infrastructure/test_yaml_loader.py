"""Tests for YAML config loading infrastructure."""

from pathlib import Path

import pytest

from skill_eval.config.domain.config import HarnessConfig
from skill_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)
from skill_eval.config.infrastructure.yaml_loader import YamlConfigLoader
from tests.config.fake_observer import FakeConfigObserver

# __file__ is tests/config/infrastructure/test_yaml_loader.py
FIXTURES = Path(__file__).parent.parent.parent / "fixtures"

_MINIMAL = """\
name: minimal
agent:
  type: claude_code_sdk
  model: claude-sonnet-4-5
judge:
  model: vertex_ai/claude-opus-4-5
  temperature: {temperature}
rubric:
  domains:
    backend:
      criteria: "- correctness (0-50)"
storage:
  scenarios_dir: scenarios
  skills_dir: skills
  results_dir: results
"""


def _load(path: Path, observer: FakeConfigObserver | None = None) -> HarnessConfig:
    return YamlConfigLoader(
        observer=observer if observer is not None else FakeConfigObserver()
    ).load(path=path)


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "harness.yaml"
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def judge_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SKILL_EVAL_JUDGE_MODEL", "vertex_ai/claude-opus-4-5")
    monkeypatch.delenv("SKILL_EVAL_AGENT_MODEL", raising=False)
    monkeypatch.delenv("SKILL_EVAL_RESULTS_DIR", raising=False)


class TestValidConfigLoading:
    """The fixture harness config loads with every field populated."""

    @pytest.mark.usefixtures("judge_env")
    def test_loads_name(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert cfg.name == "rails-ai-behavioral"

    @pytest.mark.usefixtures("judge_env")
    def test_loads_agent_with_inline_default(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert cfg.agent.type == "claude_code_sdk"
        assert cfg.agent.model == "claude-sonnet-4-5"
        assert cfg.agent.timeout_seconds == 900
        assert cfg.agent.max_turns == 8

    @pytest.mark.usefixtures("judge_env")
    def test_loads_judge(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert cfg.judge.model == "vertex_ai/claude-opus-4-5"
        assert cfg.judge.strategy == "parallel"
        assert cfg.judge.max_concurrent == 2

    @pytest.mark.usefixtures("judge_env")
    def test_loads_rubric_domains_in_order(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert list(cfg.rubric.domains) == ["backend", "security"]
        assert cfg.rubric.threshold_fraction == 0.7
        assert cfg.rubric.domains["backend"].max_score == 50

    @pytest.mark.usefixtures("judge_env")
    def test_inlines_criteria_file(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert "background_work (0-20)" in cfg.rubric.domains["backend"].criteria

    @pytest.mark.usefixtures("judge_env")
    def test_inlines_context_files(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        security = cfg.rubric.domains["security"]
        assert "sql_injection" in security.criteria
        assert "critical blocker" in security.context

    @pytest.mark.usefixtures("judge_env")
    def test_storage_paths_resolve_against_config_dir(self) -> None:
        cfg = _load(FIXTURES / "harness.yaml")
        assert cfg.storage.scenarios_dir == FIXTURES.resolve() / "scenarios"
        assert cfg.storage.results_dir == FIXTURES.resolve() / "results"

    def test_env_var_overrides_inline_default(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("SKILL_EVAL_JUDGE_MODEL", "vertex_ai/claude-opus-4-5")
        monkeypatch.setenv("SKILL_EVAL_RESULTS_DIR", str(tmp_path / "out"))
        cfg = _load(FIXTURES / "harness.yaml")
        assert cfg.storage.results_dir == tmp_path / "out"

    @pytest.mark.usefixtures("judge_env")
    def test_emits_config_loaded_event(self) -> None:
        observer = FakeConfigObserver()
        _load(FIXTURES / "harness.yaml", observer=observer)
        assert observer.loaded == [
            {"name": "rails-ai-behavioral", "domains": ["backend", "security"]}
        ]


class TestEnvVarInterpolation:
    def test_missing_env_vars_collected_into_single_error(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.delenv("SKILL_EVAL_TEST_A", raising=False)
        monkeypatch.delenv("SKILL_EVAL_TEST_B", raising=False)
        text = _MINIMAL.format(temperature=0.0).replace(
            "name: minimal", "name: ${SKILL_EVAL_TEST_A}"
        ).replace("claude-sonnet-4-5", "${SKILL_EVAL_TEST_B}")
        with pytest.raises(MissingEnvVarsError) as exc_info:
            _load(_write(tmp_path, text))
        assert sorted(exc_info.value.missing_vars) == [
            "SKILL_EVAL_TEST_A",
            "SKILL_EVAL_TEST_B",
        ]

    def test_missing_env_var_error_message_starts_with_failed(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("SKILL_EVAL_JUDGE_MODEL", raising=False)
        with pytest.raises(MissingEnvVarsError, match="^Failed to"):
            _load(FIXTURES / "harness.yaml")


class TestLoadErrors:
    def test_missing_file_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="file not found"):
            _load(tmp_path / "absent.yaml")

    def test_invalid_yaml_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="invalid YAML"):
            _load(_write(tmp_path, "name: [unclosed\n"))

    def test_non_mapping_raises_load_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigLoadError, match="not a mapping"):
            _load(_write(tmp_path, "- just\n- a list\n"))


class TestValidation:
    def test_schema_violation_raises_validation_error(self, tmp_path: Path) -> None:
        text = _MINIMAL.format(temperature=0.0).replace("name: minimal", "name: ''")
        with pytest.raises(ConfigValidationError, match="^Failed to validate config"):
            _load(_write(tmp_path, text))

    def test_domain_name_with_path_separator_is_rejected(self, tmp_path: Path) -> None:
        text = _MINIMAL.format(temperature=0.0).replace("    backend:", "    api/backend:")
        with pytest.raises(ConfigValidationError, match="^Failed to validate config"):
            _load(_write(tmp_path, text))

    def test_unreadable_rubric_files_all_reported(self, tmp_path: Path) -> None:
        text = _MINIMAL.format(temperature=0.0).replace(
            '      criteria: "- correctness (0-50)"',
            "      criteria_file: missing_criteria.md\n"
            "      context_files:\n"
            "        - missing_context.md",
        )
        with pytest.raises(ConfigValidationError) as exc_info:
            _load(_write(tmp_path, text))
        message = str(exc_info.value)
        assert "missing_criteria.md" in message
        assert "missing_context.md" in message


class TestJudgeTemperatureWarning:
    def test_high_judge_temperature_emits_warning(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()
        _load(_write(tmp_path, _MINIMAL.format(temperature=0.7)), observer=observer)
        assert observer.warnings == [{"temperature": "0.7"}]

    def test_zero_judge_temperature_no_warning(self, tmp_path: Path) -> None:
        observer = FakeConfigObserver()
        _load(_write(tmp_path, _MINIMAL.format(temperature=0.0)), observer=observer)
        assert observer.warnings == []
