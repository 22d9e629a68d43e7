"""ClaudeAgentSDKInvoker — agent invoker using the Claude Agent SDK."""

import asyncio
import tempfile
import time
from datetime import UTC, datetime

from claude_agent_sdk import query
from claude_agent_sdk._errors import ClaudeSDKError
from claude_agent_sdk.types import (
    AssistantMessage,
    ClaudeAgentOptions,
    ResultMessage,
    TextBlock,
)

from skill_eval.agent.domain.instructions import build_system_prompt
from skill_eval.agent.domain.observer import AgentObserver
from skill_eval.agent.domain.transcript import Transcript, Variant
from skill_eval.agent.infrastructure.errors import (
    InvocationError,
    InvocationProcessError,
    InvocationTimeoutError,
)
from skill_eval.config.domain.agent import AgentConfig

# allowed_tools alone does not remove built-in tools from the agent's context;
# it only controls approval requirements.
BUILTIN_TOOLS = [
    "Bash",
    "Edit",
    "Glob",
    "Grep",
    "LS",
    "MultiEdit",
    "NotebookEdit",
    "NotebookRead",
    "Read",
    "Task",
    "TodoRead",
    "TodoWrite",
    "WebFetch",
    "WebSearch",
    "Write",
]


class ClaudeAgentSDKInvoker:
    """Agent invoker that delegates to the Claude Agent SDK.

    One instance is constructed per (scenario, variant) invocation. The
    scenario id and variant are injected at construction time so that
    observer events carry full context without polluting the invoke() signature.
    """

    def __init__(
        self,
        config: AgentConfig,
        scenario_id: str,
        variant: Variant,
        observer: AgentObserver,
    ) -> None:
        self._config = config
        self._scenario_id = scenario_id
        self._variant = variant
        self._observer = observer

    async def invoke(
        self,
        prompt: str,
        system_context: str | None = None,
        timeout_seconds: float | None = None,
    ) -> Transcript:
        """Invoke the agent once and return its Transcript.

        Opens a fresh SDK session with every built-in tool disallowed, no user
        or project settings, and an empty temporary working directory, so the
        only difference between two calls is the injected context. There
        is no retry: a failed call fails the run.

        Raises:
            InvocationTimeoutError: if the call exceeds the deadline.
            InvocationProcessError: if the SDK raises, the agent returns an
                error, or no usable ResultMessage is present in the stream.
        """
        timeout = timeout_seconds or self._config.timeout_seconds
        self._observer.agent_invocation_started(
            scenario_id=self._scenario_id,
            variant=self._variant,
            model=self._config.model,
        )

        start = time.monotonic()
        try:
            try:
                with tempfile.TemporaryDirectory(prefix="skill-eval-") as workdir:
                    options = self._build_options(
                        system_context=system_context, workdir=workdir
                    )
                    async with asyncio.timeout(timeout):
                        result_message = await self._collect_result(
                            prompt=prompt, options=options
                        )
            except TimeoutError as exc:
                raise InvocationTimeoutError(timeout_seconds=timeout) from exc
        except InvocationError as exc:
            self._observer.agent_invocation_failed(
                scenario_id=self._scenario_id,
                variant=self._variant,
                reason=str(exc).removeprefix("Failed to invoke agent: "),
            )
            raise

        measured_ms = int((time.monotonic() - start) * 1000)
        duration_ms = result_message.duration_ms or measured_ms

        self._observer.agent_invocation_completed(
            scenario_id=self._scenario_id,
            variant=self._variant,
            duration_ms=duration_ms,
            num_turns=result_message.num_turns,
            cost_usd=result_message.total_cost_usd,
        )

        assert result_message.result is not None  # guaranteed by _collect_result
        return Transcript(
            scenario_id=self._scenario_id,
            variant=self._variant,
            text=result_message.result,
            captured_at=datetime.now(UTC),
            duration_ms=duration_ms,
            num_turns=result_message.num_turns,
            cost_usd=result_message.total_cost_usd,
        )

    def _build_options(
        self, system_context: str | None, workdir: str
    ) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            model=self._config.model,
            system_prompt=build_system_prompt(system_context),
            allowed_tools=[],
            disallowed_tools=list(BUILTIN_TOOLS),
            permission_mode="bypassPermissions",
            setting_sources=[],
            max_turns=self._config.max_turns,
            cwd=workdir,
        )

    async def _collect_result(
        self, prompt: str, options: ClaudeAgentOptions
    ) -> ResultMessage:
        """Run the SDK query, stream assistant text to the observer, return the ResultMessage.

        Raises:
            InvocationProcessError: on SDK errors or missing/error ResultMessage.
        """
        result_message: ResultMessage | None = None

        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, ResultMessage):
                    result_message = message
                elif isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock) and block.text:
                            self._observer.agent_text_received(
                                scenario_id=self._scenario_id,
                                variant=self._variant,
                                text=block.text,
                            )
        except ClaudeSDKError as exc:
            raise InvocationProcessError(reason=str(exc)) from exc
        except Exception as exc:
            # The SDK's message reader raises a bare Exception when the CLI
            # subprocess dies.
            raise InvocationProcessError(reason=str(exc)) from exc

        if result_message is None:
            raise InvocationProcessError(reason="no ResultMessage in response stream")

        if result_message.is_error:
            raise InvocationProcessError(
                reason=f"agent returned error response: {result_message.result}"
            )

        if result_message.result is None:
            raise InvocationProcessError(reason="ResultMessage has no result text")

        return result_message
