"""Test doubles shared across test modules."""

from collections.abc import Callable, Sequence
from typing import Any

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage


class ScriptedChatModel:
    """Stand-in chat model that replays queued responses or computes one from the prompt."""

    def __init__(
        self,
        responses: Sequence[AIMessage] | None = None,
        respond: Callable[[list[BaseMessage]], AIMessage] | None = None,
    ):
        self.responses = list(responses or [])
        self.respond = respond
        self.calls: list[list[BaseMessage]] = []
        self.bound_tools: list[dict[str, Any]] | None = None

    def bind_tools(self, tools, **kwargs):
        self.bound_tools = list(tools)
        return self

    async def ainvoke(self, messages, config=None, **kwargs) -> AIMessage:
        self.calls.append(list(messages))
        if self.respond is not None:
            return self.respond(list(messages))
        return self.responses.pop(0)


def tool_call_message(*calls: tuple[str, str, dict[str, Any]], content: str = "") -> AIMessage:
    """AIMessage requesting (id, name, args) tool calls."""
    return AIMessage(
        content=content,
        tool_calls=[{"id": call_id, "name": name, "args": args} for call_id, name, args in calls],
    )


def count_human_messages(messages: list[BaseMessage]) -> AIMessage:
    """Echo model: replies with how many human messages it can see."""
    count = sum(1 for m in messages if isinstance(m, HumanMessage))
    return AIMessage(content=f"I can see {count} messages from you.")
