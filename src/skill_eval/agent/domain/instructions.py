"""System prompt construction shared by every agent invocation."""

BASELINE_INSTRUCTION = (
    "Implement the requested feature. Be concise. "
    "Make reasonable assumptions instead of asking clarifying questions."
)


def build_system_prompt(system_context: str | None = None) -> str:
    """Return the system prompt, with ``system_context`` prepended when given.

    Baseline and treatment invocations differ only by this prepended block.
    """
    if system_context is None or not system_context.strip():
        return BASELINE_INSTRUCTION
    return f"{system_context.rstrip()}\n\n{BASELINE_INSTRUCTION}"
