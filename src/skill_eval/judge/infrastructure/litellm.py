"""LiteLLM judges — domain and panel judge implementations using LiteLLM structured output."""

import asyncio
import time

import litellm
from pydantic import BaseModel, ValidationError

from skill_eval.agent.domain.transcript import Transcript
from skill_eval.config.domain.judge import JudgeConfig
from skill_eval.config.domain.rubric import DomainRubric
from skill_eval.judge.domain.errors import InvalidScoreError
from skill_eval.judge.domain.judgment import (
    DomainJudgeResponse,
    Judgment,
    PanelJudgeResponse,
    build_judgment,
)
from skill_eval.judge.domain.observer import JudgeObserver
from skill_eval.judge.infrastructure.errors import (
    JudgeError,
    JudgeInvocationError,
    JudgeOutputFormatError,
    JudgeTimeoutError,
)
from skill_eval.judge.infrastructure.prompts import (
    SYSTEM_PROMPT,
    build_domain_prompt,
    build_panel_prompt,
    unwrap_json_fence,
)


async def _complete(
    config: JudgeConfig, user_message: str, response_format: type[BaseModel]
) -> str:
    """Send one judge request and return the raw message content.

    Raises:
        JudgeTimeoutError: if the call exceeds config.timeout_seconds.
        JudgeInvocationError: on any transport or provider failure.
        JudgeOutputFormatError: if the response carries no content.
    """
    try:
        async with asyncio.timeout(config.timeout_seconds):
            response = await litellm.acompletion(
                model=config.model,
                temperature=config.temperature,
                response_format=response_format,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": user_message},
                ],
            )
    except TimeoutError as exc:
        raise JudgeTimeoutError(timeout_seconds=config.timeout_seconds) from exc
    except Exception as exc:
        raise JudgeInvocationError(reason=str(exc)) from exc

    content: str | None = response.choices[0].message.content
    if not content:
        raise JudgeOutputFormatError(reason="empty response content")
    return content


class LiteLLMDomainJudge:
    """Domain judge that delegates to an LLM via LiteLLM.

    One instance is constructed per scenario run. The scenario id is injected
    at construction time so that observer events carry full context without
    polluting the score() signature.
    """

    def __init__(
        self, config: JudgeConfig, scenario_id: str, observer: JudgeObserver
    ) -> None:
        self._config = config
        self._scenario_id = scenario_id
        self._observer = observer

        if config.temperature > 0.0:
            self._observer.judge_high_temperature_warned(
                scenario_id=scenario_id, temperature=config.temperature
            )

    async def score(
        self,
        transcript: Transcript,
        requirements: str,
        domain: str,
        rubric: DomainRubric,
    ) -> Judgment:
        """Invoke the LLM judge for one domain and return a validated Judgment.

        Raises:
            JudgeError: if the call fails, times out, or returns unparseable output.
            InvalidScoreError: if the reported score is outside [0, max_score].
        """
        self._observer.judge_scoring_started(
            scenario_id=self._scenario_id, domain=domain, model=self._config.model
        )
        user_message = build_domain_prompt(
            domain=domain,
            requirements=requirements,
            agent_output=transcript.text,
            rubric=rubric,
        )

        start = time.monotonic()
        try:
            raw_content = await _complete(
                self._config, user_message, DomainJudgeResponse
            )
            try:
                response = DomainJudgeResponse.model_validate_json(
                    unwrap_json_fence(raw_content)
                )
            except ValidationError as exc:
                raise JudgeOutputFormatError(reason=str(exc)) from exc

            judgment = build_judgment(
                domain=domain,
                response=response,
                max_score=rubric.max_score,
                raw_response=raw_content,
            )
        except (JudgeError, InvalidScoreError) as exc:
            self._observer.judge_scoring_failed(
                scenario_id=self._scenario_id, domain=domain, reason=str(exc)
            )
            raise

        self._observer.judge_scoring_completed(
            scenario_id=self._scenario_id,
            domain=domain,
            score=judgment.score,
            max_score=judgment.max_score,
            duration_ms=int((time.monotonic() - start) * 1000),
        )
        return judgment


class LiteLLMPanelJudge:
    """Panel judge that scores every domain in one LiteLLM call."""

    def __init__(
        self, config: JudgeConfig, scenario_id: str, observer: JudgeObserver
    ) -> None:
        self._config = config
        self._scenario_id = scenario_id
        self._observer = observer

        if config.temperature > 0.0:
            self._observer.judge_high_temperature_warned(
                scenario_id=scenario_id, temperature=config.temperature
            )

    async def score(
        self,
        transcript: Transcript,
        requirements: str,
        rubrics: dict[str, DomainRubric],
    ) -> list[Judgment]:
        """Invoke the LLM once and split the response into per-domain Judgments.

        Raises:
            JudgeError: if the call fails, times out, returns unparseable output,
                or omits one of the requested domains.
            InvalidScoreError: if any reported score is outside its domain's range.
        """
        label = ",".join(rubrics)
        self._observer.judge_scoring_started(
            scenario_id=self._scenario_id, domain=label, model=self._config.model
        )
        user_message = build_panel_prompt(
            requirements=requirements,
            agent_output=transcript.text,
            rubrics=rubrics,
        )

        start = time.monotonic()
        try:
            raw_content = await _complete(
                self._config, user_message, PanelJudgeResponse
            )
            try:
                panel = PanelJudgeResponse.model_validate_json(
                    unwrap_json_fence(raw_content)
                )
            except ValidationError as exc:
                raise JudgeOutputFormatError(reason=str(exc)) from exc

            missing = [domain for domain in rubrics if domain not in panel.domains]
            if missing:
                raise JudgeOutputFormatError(
                    reason=f"response is missing domains: {', '.join(missing)}"
                )

            judgments = [
                build_judgment(
                    domain=domain,
                    response=panel.domains[domain],
                    max_score=rubric.max_score,
                    raw_response=raw_content,
                )
                for domain, rubric in rubrics.items()
            ]
        except (JudgeError, InvalidScoreError) as exc:
            self._observer.judge_scoring_failed(
                scenario_id=self._scenario_id, domain=label, reason=str(exc)
            )
            raise

        duration_ms = int((time.monotonic() - start) * 1000)
        for judgment in judgments:
            self._observer.judge_scoring_completed(
                scenario_id=self._scenario_id,
                domain=judgment.domain,
                score=judgment.score,
                max_score=judgment.max_score,
                duration_ms=duration_ms,
            )
        return judgments
