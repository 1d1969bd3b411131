"""Message serialization for conversation persistence.

Messages are langchain_core messages throughout the service. On disk they use
the langchain_core dict representation, which keeps role, content, tool calls
and the tool_call_id linkage of tool results.
"""

from collections.abc import Sequence
from typing import Any

from langchain_core.messages import BaseMessage, SystemMessage, messages_from_dict, messages_to_dict


def serialize_messages(messages: Sequence[BaseMessage]) -> list[dict[str, Any]]:
    """Convert messages to plain dicts suitable for a document store.

    Raises:
        ValueError: If a system message is passed; the preamble is rendered per turn and never stored
    """
    if any(isinstance(m, SystemMessage) for m in messages):
        raise ValueError("System messages are not persisted")
    return messages_to_dict(messages)


def deserialize_messages(data: Sequence[dict[str, Any]]) -> list[BaseMessage]:
    """Rebuild messages from their stored dict form."""
    return messages_from_dict(data)
