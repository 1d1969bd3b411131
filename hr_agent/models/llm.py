"""LLM-related data models and types."""

from dataclasses import dataclass, field
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage


@dataclass
class LLMUsage:
    """Token usage summed over the model calls of one turn."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0

    def add(self, message: AIMessage) -> None:
        """Accumulate the usage metadata reported on a model response, if any."""
        usage = getattr(message, "usage_metadata", None)
        if not usage:
            return
        self.input_tokens += usage.get("input_tokens", 0)
        self.output_tokens += usage.get("output_tokens", 0)
        self.total_tokens += usage.get("total_tokens", 0)


@dataclass
class RetrievalResult:
    """One similarity match: the stored record and its score."""

    record: dict[str, Any]
    score: float

    def as_dict(self) -> dict[str, Any]:
        return {"record": self.record, "score": self.score}


@dataclass
class AgentLoopResult:
    """Result from executing one conversation turn."""

    content: str
    messages: list[BaseMessage]
    turns: int
    usage: LLMUsage = field(default_factory=LLMUsage)
