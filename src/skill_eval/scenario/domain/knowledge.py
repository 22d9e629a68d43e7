"""KnowledgeModule value object and loader port."""

from typing import Protocol

from pydantic import BaseModel, ConfigDict


class KnowledgeModule(BaseModel):
    """Opaque guidance text injected into an agent's context."""

    model_config = ConfigDict(frozen=True)

    reference: str
    text: str


class KnowledgeModuleLoader(Protocol):
    """Resolves a knowledge module reference to its text."""

    def load(self, reference: str) -> KnowledgeModule: ...
