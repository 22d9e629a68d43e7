"""Tests for recursive env var interpolation."""

import pytest

from skill_eval.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)


class TestCollectMissingVars:
    def test_reports_each_unset_var_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SE_MISSING", raising=False)
        data = {"a": "${SE_MISSING}", "b": ["x ${SE_MISSING} y"]}
        assert collect_missing_vars(data) == ["SE_MISSING"]

    def test_inline_default_is_not_missing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SE_MISSING", raising=False)
        assert collect_missing_vars({"a": "${SE_MISSING:-fallback}"}) == []


class TestInterpolate:
    def test_substitutes_nested_values(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SE_MODEL", "claude-sonnet-4-5")
        data = {"agent": {"model": "${SE_MODEL}", "args": ["--model=${SE_MODEL}"]}}
        assert interpolate(data) == {
            "agent": {"model": "claude-sonnet-4-5", "args": ["--model=claude-sonnet-4-5"]}
        }

    def test_uses_default_when_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("SE_MISSING", raising=False)
        assert interpolate("${SE_MISSING:-results}") == "results"

    def test_leaves_non_strings_untouched(self) -> None:
        assert interpolate({"n": 3, "flag": True, "none": None}) == {
            "n": 3,
            "flag": True,
            "none": None,
        }
