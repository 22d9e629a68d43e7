"""CLI entrypoint for skill-eval — typer app with run-scenario, list-scenarios and report."""

import asyncio
import logging
from pathlib import Path

import structlog
import typer

from skill_eval.agent.domain.observer import AgentObserver
from skill_eval.agent.infrastructure.observer import (
    CompositeAgentObserver,
    StructlogAgentObserver,
)
from skill_eval.agent.infrastructure.registry import create_invoker_factory
from skill_eval.cli.output.report import (
    print_ledger,
    print_run_report,
    print_scenario_list,
)
from skill_eval.config.domain.config import HarnessConfig
from skill_eval.config.infrastructure.observer import StructlogConfigObserver
from skill_eval.config.infrastructure.yaml_loader import YamlConfigLoader
from skill_eval.core.errors import SkillEvalError
from skill_eval.evaluation.application.runner import ScenarioRunner
from skill_eval.evaluation.domain.observer import EvaluationObserver
from skill_eval.evaluation.domain.result import RunResult
from skill_eval.evaluation.infrastructure.composite_observer import (
    CompositeEvaluationObserver,
)
from skill_eval.evaluation.infrastructure.observer import StructlogEvaluationObserver
from skill_eval.evaluation.infrastructure.progress_observer import (
    ProgressEvaluationObserver,
)
from skill_eval.judge.domain.observer import JudgeObserver
from skill_eval.judge.infrastructure.observer import (
    CompositeJudgeObserver,
    StructlogJudgeObserver,
)
from skill_eval.judge.infrastructure.registry import create_judge_coordinator
from skill_eval.results.infrastructure.file_store import FileResultStore
from skill_eval.results.infrastructure.git import detect_git_revision
from skill_eval.results.infrastructure.json_ledger import JsonLedger
from skill_eval.results.infrastructure.live_log import LiveLog, LiveLogObserver
from skill_eval.scenario.infrastructure.errors import MalformedScenarioError
from skill_eval.scenario.infrastructure.knowledge_loader import (
    FileKnowledgeModuleLoader,
)
from skill_eval.scenario.infrastructure.repository import ScenarioRepository

app = typer.Typer(add_completion=False)

EXIT_PASS = 0
EXIT_BEHAVIORAL_FAIL = 1
EXIT_INFRASTRUCTURE_ERROR = 2

_CONFIG_OPTION = typer.Option(
    Path("harness.yaml"),
    "--config",
    "-c",
    envvar="SKILL_EVAL_CONFIG",
    help="Path to the harness config YAML",
)
_LOG_FORMAT_OPTION = typer.Option(
    "console",
    "--log-format",
    help="Log format: 'console' or 'json'",
)


def _configure_structlog(log_format: str, level: int = logging.NOTSET) -> None:
    """Configure structlog based on the requested format."""
    if log_format == "console":
        renderer: structlog.types.Processor = structlog.dev.ConsoleRenderer()
    elif log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        typer.echo(f"Invalid log format: {log_format!r}. Must be 'console' or 'json'.")
        raise typer.Exit(code=EXIT_INFRASTRUCTURE_ERROR)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


def _load_config(config_path: Path) -> HarnessConfig:
    loader = YamlConfigLoader(observer=StructlogConfigObserver())
    try:
        return loader.load(path=config_path)
    except SkillEvalError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=EXIT_INFRASTRUCTURE_ERROR) from exc


def _build_runner(config: HarnessConfig, log_format: str) -> tuple[ScenarioRunner, LiveLog]:
    live_log = LiveLog(path=config.storage.live_log_path)
    live_observer = LiveLogObserver(live_log=live_log)

    agent_observers: list[AgentObserver] = [StructlogAgentObserver(), live_observer]
    judge_observers: list[JudgeObserver] = [StructlogJudgeObserver(), live_observer]
    evaluation_observers: list[EvaluationObserver] = [
        StructlogEvaluationObserver(),
        live_observer,
    ]
    if log_format != "json":
        evaluation_observers.append(ProgressEvaluationObserver())

    runner = ScenarioRunner(
        config=config,
        invoker_factory=create_invoker_factory(
            config=config.agent,
            observer=CompositeAgentObserver(observers=agent_observers),
        ),
        judge_coordinator=create_judge_coordinator(
            config=config.judge,
            observer=CompositeJudgeObserver(observers=judge_observers),
        ),
        knowledge_loader=FileKnowledgeModuleLoader(
            skills_dir=config.storage.skills_dir
        ),
        result_store=FileResultStore(runs_dir=config.storage.runs_dir),
        ledger=JsonLedger(
            ledger_path=config.storage.ledger_path,
            history_path=config.storage.history_path,
        ),
        git_revision=detect_git_revision(cwd=Path.cwd()),
        observer=CompositeEvaluationObserver(observers=evaluation_observers),
    )
    return runner, live_log


@app.command("run-scenario")
def run_scenario(
    name: str = typer.Argument(..., help="Scenario name (file stem in scenarios_dir)"),
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Run one named scenario. Exit 0 on pass, 1 on behavioral fail, 2 on infrastructure error."""
    _configure_structlog(log_format=log_format)
    config = _load_config(config_path=config_path)

    result: RunResult | None = None
    try:
        scenario = ScenarioRepository(scenarios_dir=config.storage.scenarios_dir).load(
            name
        )
        runner, live_log = _build_runner(config=config, log_format=log_format)
        typer.echo(f"Live log: {live_log.path}  (tail -f to follow)")
        result = asyncio.run(runner.run(scenario))
    except KeyboardInterrupt:
        typer.echo("Run interrupted.")
    except SkillEvalError as exc:
        typer.echo(str(exc))
    except Exception as exc:  # noqa: BLE001
        typer.echo(f"Unexpected error: {exc}\nPlease report this bug.")

    if result is None:
        raise typer.Exit(code=EXIT_INFRASTRUCTURE_ERROR)

    print_run_report(summary=result.summary, run_dir=result.run_dir)
    raise typer.Exit(
        code=EXIT_PASS if result.summary.passed else EXIT_BEHAVIORAL_FAIL
    )


@app.command("list-scenarios")
def list_scenarios(
    config_path: Path = _CONFIG_OPTION,
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """List scenario names with their kind (differential / judged) and title."""
    _configure_structlog(log_format=log_format, level=logging.WARNING)
    config = _load_config(config_path=config_path)

    repository = ScenarioRepository(scenarios_dir=config.storage.scenarios_dir)
    rows: list[tuple[str, str, str]] = []
    for scenario_name in repository.list_names():
        try:
            scenario = repository.load(scenario_name)
        except MalformedScenarioError as exc:
            rows.append((scenario_name, "malformed", exc.reason))
            continue
        rows.append((scenario_name, str(scenario.kind), scenario.title or ""))

    print_scenario_list(rows=rows)


@app.command()
def report(
    config_path: Path = _CONFIG_OPTION,
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Only show entries recorded on this branch"
    ),
    log_format: str = _LOG_FORMAT_OPTION,
) -> None:
    """Show the cumulative ledger and the behavioral pass rate."""
    _configure_structlog(log_format=log_format, level=logging.WARNING)
    config = _load_config(config_path=config_path)

    ledger = JsonLedger(
        ledger_path=config.storage.ledger_path,
        history_path=config.storage.history_path,
    )
    try:
        entries = ledger.entries()
    except SkillEvalError as exc:
        typer.echo(str(exc))
        raise typer.Exit(code=EXIT_INFRASTRUCTURE_ERROR) from exc

    if branch is not None:
        entries = [e for e in entries if e.branch == branch]
    print_ledger(entries=entries)


if __name__ == "__main__":
    app()
