"""Judge coordination strategies: concurrent per-domain calls, or one delegated call."""

import asyncio

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.config.domain.rubric import DomainRubric, RubricConfig
from skill_eval.core.errors import SkillEvalError
from skill_eval.judge.domain.errors import UnknownDomainError
from skill_eval.judge.domain.judge import DomainJudgeFactory, PanelJudgeFactory
from skill_eval.judge.domain.judgment import Judgment


def _select_rubrics(
    domains: list[str], rubric: RubricConfig
) -> dict[str, DomainRubric]:
    """Resolve requested domains to their rubric entries, preserving order.

    Raises:
        UnknownDomainError: if any domain is not configured in the rubric.
    """
    for domain in domains:
        if domain not in rubric.domains:
            raise UnknownDomainError(
                domain=domain, known_domains=list(rubric.domains)
            )
    return {domain: rubric.domains[domain] for domain in domains}


class ParallelJudgeCoordinator:
    """Runs one judge call per domain, concurrently, bounded by max_concurrent.

    With max_concurrent=1 the domains are judged one after another.
    """

    def __init__(self, judge_factory: DomainJudgeFactory, max_concurrent: int) -> None:
        self._judge_factory = judge_factory
        self._max_concurrent = max_concurrent

    async def evaluate(
        self,
        transcript: Transcript,
        domains: list[str],
        rubric: RubricConfig,
        requirements: str,
    ) -> list[Judgment]:
        """Judge every domain and return the Judgments in the requested order.

        Raises:
            UnknownDomainError: before any call, if a domain is not in the rubric.
            SkillEvalError: the first judge failure; sibling calls are cancelled.
        """
        rubrics = _select_rubrics(domains, rubric)
        judge = self._judge_factory.create(scenario_id=transcript.scenario_id)
        sem = asyncio.Semaphore(self._max_concurrent)
        judgments: dict[str, Judgment] = {}

        async def score_one(domain: str, domain_rubric: DomainRubric) -> None:
            async with sem:
                judgments[domain] = await judge.score(
                    transcript=transcript,
                    requirements=requirements,
                    domain=domain,
                    rubric=domain_rubric,
                )

        try:
            async with asyncio.TaskGroup() as tg:
                for domain, domain_rubric in rubrics.items():
                    tg.create_task(score_one(domain, domain_rubric))
        except* SkillEvalError as eg:
            # The observer was already notified by the judge for each failure.
            raise eg.exceptions[0]

        return [judgments[domain] for domain in rubrics]


class DelegatedJudgeCoordinator:
    """Scores every domain in a single delegated panel call."""

    def __init__(self, judge_factory: PanelJudgeFactory) -> None:
        self._judge_factory = judge_factory

    async def evaluate(
        self,
        transcript: Transcript,
        domains: list[str],
        rubric: RubricConfig,
        requirements: str,
    ) -> list[Judgment]:
        rubrics = _select_rubrics(domains, rubric)
        judge = self._judge_factory.create(scenario_id=transcript.scenario_id)
        return await judge.score(
            transcript=transcript, requirements=requirements, rubrics=rubrics
        )
