"""DifferentialVerifier — runs the baseline and treatment arms and classifies assertions."""

from typing import Protocol

from skill_eval.agent.domain.invoker import AgentInvokerFactory
from skill_eval.agent.domain.transcript import Transcript, Variant
from skill_eval.differential.domain.assertion import classify_assertions
from skill_eval.differential.domain.report import DifferentialReport
from skill_eval.scenario.domain.knowledge import KnowledgeModule
from skill_eval.scenario.domain.scenario import Scenario


class TranscriptSink(Protocol):
    """Receives each transcript the moment it is captured."""

    def record_transcript(self, transcript: Transcript) -> None: ...


class DifferentialVerifier:
    """Executes one RED/GREEN comparison for a differential scenario.

    The baseline call runs without context and must complete before the
    treatment call starts, so the two arms never share a session.
    """

    def __init__(
        self,
        invoker_factory: AgentInvokerFactory,
        timeout_seconds: float | None = None,
    ) -> None:
        self._invoker_factory = invoker_factory
        self._timeout_seconds = timeout_seconds

    async def verify(
        self,
        scenario: Scenario,
        knowledge: KnowledgeModule,
        sink: TranscriptSink,
    ) -> DifferentialReport:
        """Run both arms and classify every assertion.

        Invocation errors propagate unchanged; any transcript captured before
        the failure has already been handed to ``sink``.
        """
        baseline_invoker = self._invoker_factory.create(
            scenario_id=scenario.id, variant=Variant.BASELINE
        )
        baseline = await baseline_invoker.invoke(
            prompt=scenario.prompt,
            system_context=None,
            timeout_seconds=self._timeout_seconds,
        )
        sink.record_transcript(baseline)

        treatment_invoker = self._invoker_factory.create(
            scenario_id=scenario.id, variant=Variant.TREATMENT
        )
        treatment = await treatment_invoker.invoke(
            prompt=scenario.prompt,
            system_context=knowledge.text,
            timeout_seconds=self._timeout_seconds,
        )
        sink.record_transcript(treatment)

        results = classify_assertions(
            scenario.assertions,
            baseline_text=baseline.text,
            treatment_text=treatment.text,
        )
        return DifferentialReport(
            baseline=baseline, treatment=treatment, results=tuple(results)
        )
