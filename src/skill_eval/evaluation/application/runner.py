"""ScenarioRunner — orchestrates one scenario run from invocation to persisted result."""

import asyncio
import time
from datetime import UTC, datetime
from pathlib import Path

from skill_eval.agent.domain.invoker import AgentInvokerFactory
from skill_eval.agent.domain.transcript import Variant
from skill_eval.agent.infrastructure.errors import InvocationError
from skill_eval.config.domain.config import HarnessConfig
from skill_eval.core.errors import SkillEvalError
from skill_eval.differential.application.verifier import DifferentialVerifier
from skill_eval.evaluation.domain.artifacts import RunArtifacts
from skill_eval.evaluation.domain.observer import EvaluationObserver
from skill_eval.evaluation.domain.result import RunResult
from skill_eval.evaluation.domain.summary import (
    GitRevision,
    RunKind,
    RunOutcome,
    RunSummary,
    RunTimings,
)
from skill_eval.judge.domain.coordinator import JudgeCoordinator
from skill_eval.judge.domain.errors import InvalidScoreError, UnknownDomainError
from skill_eval.judge.infrastructure.errors import JudgeError
from skill_eval.results.domain.store import Ledger, ResultStore
from skill_eval.scenario.domain.knowledge import KnowledgeModule, KnowledgeModuleLoader
from skill_eval.scenario.domain.scenario import Scenario
from skill_eval.scoring.domain.aggregator import aggregate

_DIFFERENTIAL_PHASES = ["differential"]
_JUDGED_PHASES = ["plan", "judging"]


class ScenarioRunner:
    """Runs a single scenario: differential RED/GREEN or judged plan evaluation.

    The runner receives abstract factories, a coordinator and persistence ports
    so that implementations can be swapped for testing without touching the
    orchestration logic.

    Behavioral failures complete normally with a FAIL outcome. Infrastructure
    failures (agent, judge, invalid score, cancellation) persist whatever was
    captured with an ERROR outcome and are then re-raised.
    """

    def __init__(
        self,
        config: HarnessConfig,
        invoker_factory: AgentInvokerFactory,
        judge_coordinator: JudgeCoordinator,
        knowledge_loader: KnowledgeModuleLoader,
        result_store: ResultStore,
        ledger: Ledger,
        git_revision: GitRevision,
        observer: EvaluationObserver,
    ) -> None:
        self._config = config
        self._invoker_factory = invoker_factory
        self._judge_coordinator = judge_coordinator
        self._knowledge_loader = knowledge_loader
        self._result_store = result_store
        self._ledger = ledger
        self._git_revision = git_revision
        self._observer = observer
        self._verifier = DifferentialVerifier(
            invoker_factory=invoker_factory,
            timeout_seconds=config.agent.timeout_seconds,
        )

    async def run(self, scenario: Scenario) -> RunResult:
        """Execute the scenario and return the persisted RunResult.

        Raises:
            KnowledgeModuleNotFoundError: before any invocation, if the
                scenario's context cannot be resolved.
            UnknownDomainError: before any invocation, if a judged domain has
                no rubric entry.
            InvocationError, JudgeError, InvalidScoreError: after persisting
                the partial run with an ERROR outcome.
            ResultStoreError: if the run cannot be persisted; observers get
                run_failed with no run directory.
        """
        kind = RunKind(scenario.kind.value)
        knowledge = self._load_knowledge(scenario)
        domains = self._judged_domains(scenario) if kind is RunKind.JUDGED else []
        phases = _DIFFERENTIAL_PHASES if kind is RunKind.DIFFERENTIAL else _JUDGED_PHASES

        started_at = datetime.now(UTC)
        start = time.monotonic()
        artifacts = RunArtifacts()
        self._observer.run_started(scenario_id=scenario.id, kind=kind, phases=phases)

        try:
            if kind is RunKind.DIFFERENTIAL:
                assert knowledge is not None  # enforced by the scenario loader
                outcome = await self._run_differential(scenario, knowledge, artifacts)
            else:
                outcome = await self._run_judged(scenario, knowledge, domains, artifacts)
        except (
            InvocationError,
            JudgeError,
            InvalidScoreError,
            asyncio.CancelledError,
        ) as exc:
            summary = self._build_summary(
                scenario=scenario,
                kind=kind,
                outcome=RunOutcome.ERROR,
                started_at=started_at,
                start=start,
                artifacts=artifacts,
                error=exc,
            )
            run_dir = self._persist_or_report(scenario, summary, artifacts)
            self._observer.run_failed(
                scenario_id=scenario.id,
                reason=summary.error_message or summary.error_kind or "",
                run_dir=str(run_dir),
            )
            raise

        summary = self._build_summary(
            scenario=scenario,
            kind=kind,
            outcome=outcome,
            started_at=started_at,
            start=start,
            artifacts=artifacts,
        )
        run_dir = self._persist_or_report(scenario, summary, artifacts)
        self._observer.run_completed(
            scenario_id=scenario.id,
            outcome=summary.outcome,
            total_score=summary.total_score,
            max_score=summary.max_score,
            run_dir=str(run_dir),
        )
        return RunResult(summary=summary, run_dir=run_dir)

    async def _run_differential(
        self,
        scenario: Scenario,
        knowledge: KnowledgeModule,
        artifacts: RunArtifacts,
    ) -> RunOutcome:
        phase_start = time.monotonic()
        self._observer.phase_started(scenario_id=scenario.id, phase="differential")
        report = await self._verifier.verify(
            scenario=scenario, knowledge=knowledge, sink=artifacts
        )
        artifacts.record_assertion_results(list(report.results))
        self._observer.phase_completed(
            scenario_id=scenario.id,
            phase="differential",
            duration_ms=_elapsed_ms(phase_start),
        )
        return RunOutcome.PASS if report.passed else RunOutcome.FAIL

    async def _run_judged(
        self,
        scenario: Scenario,
        knowledge: KnowledgeModule | None,
        domains: list[str],
        artifacts: RunArtifacts,
    ) -> RunOutcome:
        phase_start = time.monotonic()
        self._observer.phase_started(scenario_id=scenario.id, phase="plan")
        invoker = self._invoker_factory.create(
            scenario_id=scenario.id, variant=Variant.PLAN
        )
        transcript = await invoker.invoke(
            prompt=scenario.prompt,
            system_context=knowledge.text if knowledge is not None else None,
            timeout_seconds=self._config.agent.timeout_seconds,
        )
        artifacts.record_transcript(transcript)
        self._observer.phase_completed(
            scenario_id=scenario.id, phase="plan", duration_ms=_elapsed_ms(phase_start)
        )

        phase_start = time.monotonic()
        self._observer.phase_started(scenario_id=scenario.id, phase="judging")
        judgments = await self._judge_coordinator.evaluate(
            transcript=transcript,
            domains=domains,
            rubric=self._config.rubric,
            requirements=scenario.prompt,
        )
        judge_ms = _elapsed_ms(phase_start)
        artifacts.record_judgments(judgments, duration_ms=judge_ms)
        self._observer.phase_completed(
            scenario_id=scenario.id, phase="judging", duration_ms=judge_ms
        )

        score = aggregate(judgments, self._config.rubric.threshold_fraction)
        return RunOutcome.PASS if score.passed else RunOutcome.FAIL

    def _load_knowledge(self, scenario: Scenario) -> KnowledgeModule | None:
        if scenario.context is None:
            return None
        return self._knowledge_loader.load(scenario.context)

    def _judged_domains(self, scenario: Scenario) -> list[str]:
        """Domains named by the scenario, or every rubric domain when it names none."""
        rubric_domains = list(self._config.rubric.domains)
        domains = list(scenario.domains) or rubric_domains
        for domain in domains:
            if domain not in self._config.rubric.domains:
                raise UnknownDomainError(domain=domain, known_domains=rubric_domains)
        return domains

    def _build_summary(
        self,
        scenario: Scenario,
        kind: RunKind,
        outcome: RunOutcome,
        started_at: datetime,
        start: float,
        artifacts: RunArtifacts,
        error: BaseException | None = None,
    ) -> RunSummary:
        threshold = self._config.rubric.threshold_fraction
        score = aggregate(artifacts.judgments, threshold)
        return RunSummary(
            scenario_id=scenario.id,
            kind=kind,
            outcome=outcome,
            started_at=started_at,
            judgments=tuple(artifacts.judgments),
            assertion_results=tuple(artifacts.assertion_results),
            total_score=score.total_score,
            max_score=score.max_score,
            percentage=score.percentage,
            threshold_fraction=threshold,
            critical_blockers=score.critical_blockers,
            under_threshold_domains=score.under_threshold_domains,
            timings=RunTimings(
                agent_ms=artifacts.agent_ms,
                judge_ms=artifacts.judge_ms,
                total_ms=_elapsed_ms(start),
            ),
            git=self._git_revision,
            error_kind=type(error).__name__ if error is not None else None,
            error_message=(str(error) or "run cancelled") if error is not None else None,
        )

    def _persist_or_report(
        self, scenario: Scenario, summary: RunSummary, artifacts: RunArtifacts
    ) -> Path:
        """Persist the run, emitting run_failed if persistence itself fails."""
        try:
            return self._persist(scenario, summary, artifacts)
        except SkillEvalError as exc:
            self._observer.run_failed(
                scenario_id=scenario.id, reason=str(exc), run_dir=None
            )
            raise

    def _persist(
        self, scenario: Scenario, summary: RunSummary, artifacts: RunArtifacts
    ) -> Path:
        run_dir = self._result_store.persist_run(
            scenario_id=scenario.id,
            transcripts=artifacts.transcripts,
            judgments=artifacts.judgments,
            summary=summary,
        )
        self._ledger.append_to_ledger(summary, run_dir=run_dir)
        return run_dir


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
