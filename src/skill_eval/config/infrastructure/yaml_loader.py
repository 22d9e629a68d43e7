"""YAML config loader — parses, interpolates env vars, resolves files, validates."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from skill_eval.config.domain.config import HarnessConfig
from skill_eval.config.domain.observer import ConfigObserver
from skill_eval.config.infrastructure.env_interpolation import (
    collect_missing_vars,
    interpolate,
)
from skill_eval.config.infrastructure.errors import (
    ConfigLoadError,
    ConfigValidationError,
    MissingEnvVarsError,
)

_STORAGE_KEYS = ("scenarios_dir", "skills_dir", "results_dir")


class YamlConfigLoader:
    """Loads, interpolates, validates, and returns a HarnessConfig from a YAML file."""

    def __init__(self, observer: ConfigObserver) -> None:
        self._observer = observer

    def load(self, path: Path) -> HarnessConfig:
        """
        Load, interpolate, validate, and return a HarnessConfig from a YAML file.

        Relative storage paths and rubric files resolve against the directory
        holding the config file, not the current working directory.

        Raises:
            ConfigLoadError: if the file is missing or is not valid YAML.
            MissingEnvVarsError: if any ${ENV_VAR} references are unset (all collected first).
            ConfigValidationError: if a rubric file cannot be read or the schema is violated.
        """
        raw = _parse_yaml(path=path)
        _check_missing_env_vars(raw=raw)
        interpolated = _interpolate(raw=raw)
        base_dir = path.parent.resolve()
        resolved = _resolve_storage_paths(interpolated=interpolated, base_dir=base_dir)
        resolved = _resolve_rubric_files(interpolated=resolved, base_dir=base_dir)
        cfg = _build_config(resolved=resolved)
        _emit_warnings(cfg=cfg, observer=self._observer)
        self._observer.config_loaded(
            name=cfg.name, domains=list(cfg.rubric.domains.keys())
        )
        return cfg


def _parse_yaml(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except FileNotFoundError as exc:
        raise ConfigLoadError(path=path) from exc
    except yaml.YAMLError as exc:
        raise ConfigLoadError(path=path, reason=f"invalid YAML ({exc})") from exc

    if not isinstance(raw, dict):
        raise ConfigLoadError(path=path, reason="top-level YAML value is not a mapping")
    return raw


def _check_missing_env_vars(raw: Any) -> None:
    """Raise MissingEnvVarsError if any ${ENV_VAR} references in raw are unset."""
    missing = collect_missing_vars(raw)
    if missing:
        raise MissingEnvVarsError(missing)


def _interpolate(raw: Any) -> Any:
    """Return a fully interpolated copy of raw with all ${ENV_VAR} substituted."""
    return interpolate(raw)


def _resolve_path(value: Any, base_dir: Path) -> Any:
    if not isinstance(value, str):
        return value
    candidate = Path(value).expanduser()
    return candidate if candidate.is_absolute() else base_dir / candidate


def _resolve_storage_paths(interpolated: Any, base_dir: Path) -> Any:
    storage_raw = interpolated.get("storage")
    if not isinstance(storage_raw, dict):
        return interpolated

    storage = {
        key: _resolve_path(value, base_dir) if key in _STORAGE_KEYS else value
        for key, value in storage_raw.items()
    }
    return {**interpolated, "storage": storage}


def _resolve_rubric_files(interpolated: Any, base_dir: Path) -> Any:
    """
    Inline ``criteria_file`` and ``context_files`` into each domain rubric.

    Raises:
        ConfigValidationError: listing ALL unreadable files across ALL domains
            before raising (not just the first one).
    """
    rubric_raw = interpolated.get("rubric")
    if not isinstance(rubric_raw, dict):
        return interpolated
    domains_raw = rubric_raw.get("domains")
    if not isinstance(domains_raw, dict):
        return interpolated

    problems: list[str] = []
    resolved_domains: dict[str, Any] = {}
    for domain_name, domain_data in domains_raw.items():
        if not isinstance(domain_data, dict):
            resolved_domains[domain_name] = domain_data
            continue

        domain = dict(domain_data)
        criteria_file = domain.pop("criteria_file", None)
        context_files = domain.pop("context_files", None) or []

        if criteria_file is not None:
            text = _read_rubric_file(
                domain_name=domain_name,
                value=criteria_file,
                base_dir=base_dir,
                problems=problems,
            )
            if text is not None:
                domain["criteria"] = text

        context_parts: list[str] = []
        if domain.get("context"):
            context_parts.append(str(domain["context"]))
        for context_file in context_files:
            text = _read_rubric_file(
                domain_name=domain_name,
                value=context_file,
                base_dir=base_dir,
                problems=problems,
            )
            if text is not None:
                context_parts.append(text)
        if context_parts:
            domain["context"] = "\n\n".join(context_parts)

        resolved_domains[domain_name] = domain

    if problems:
        raise ConfigValidationError("; ".join(problems))

    return {**interpolated, "rubric": {**rubric_raw, "domains": resolved_domains}}


def _read_rubric_file(
    domain_name: str, value: Any, base_dir: Path, problems: list[str]
) -> str | None:
    path = _resolve_path(str(value), base_dir)
    try:
        return path.read_text(encoding="utf-8")
    except OSError:
        problems.append(f"domain '{domain_name}' references unreadable file '{path}'")
        return None


def _build_config(resolved: Any) -> HarnessConfig:
    try:
        return HarnessConfig.model_validate(resolved)
    except ValidationError as exc:
        raise ConfigValidationError(str(exc)) from exc


def _emit_warnings(cfg: HarnessConfig, observer: ConfigObserver) -> None:
    if cfg.judge.temperature > 0.0:
        observer.config_judge_temperature_warning(cfg.judge.temperature)
