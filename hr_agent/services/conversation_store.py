"""Conversation persistence keyed by thread id."""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Any

from langchain_core.messages import BaseMessage
from pymongo.collection import Collection

from hr_agent.clients.mongo import MongoConnection
from hr_agent.core.config import Settings
from hr_agent.models.messages import deserialize_messages, serialize_messages
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)

CHECKPOINT_COLLECTION_NAME = "checkpoints"


class ConversationStore(ABC):
    """Ordered, append-only message history per thread.

    Appends to different threads never interfere. Appends to the same thread must
    be serialized by the caller.
    """

    @abstractmethod
    async def load(self, thread_id: str) -> list[BaseMessage]:
        """Return the thread's messages in order, or an empty list for an unseen thread."""

    @abstractmethod
    async def append(self, thread_id: str, messages: Sequence[BaseMessage]) -> None:
        """Persist messages at the end of the thread in one atomic write."""


class InMemoryConversationStore(ConversationStore):
    """In-process store for development and tests."""

    def __init__(self):
        self._threads: dict[str, list[dict[str, Any]]] = {}

    async def load(self, thread_id: str) -> list[BaseMessage]:
        return deserialize_messages(self._threads.get(thread_id, []))

    async def append(self, thread_id: str, messages: Sequence[BaseMessage]) -> None:
        if not messages:
            return
        serialized = serialize_messages(messages)
        self._threads.setdefault(thread_id, []).extend(serialized)
        logger.debug(f"Appended {len(serialized)} messages to thread {thread_id}")

    def get_thread_count(self) -> int:
        """Get current number of stored threads."""
        return len(self._threads)


class MongoConversationStore(ConversationStore):
    """Stores each thread as one document: {_id: thread_id, messages: [...]}.

    A single-document $push is atomic, so a turn's messages land together or not at all.
    """

    def __init__(self, collection: Collection):
        self.collection = collection

    async def load(self, thread_id: str) -> list[BaseMessage]:
        document = await asyncio.to_thread(self.collection.find_one, {"_id": thread_id}, {"messages": 1})
        if not document:
            return []
        return deserialize_messages(document.get("messages", []))

    async def append(self, thread_id: str, messages: Sequence[BaseMessage]) -> None:
        if not messages:
            return
        serialized = serialize_messages(messages)
        now = datetime.now(UTC)
        await asyncio.to_thread(
            self.collection.update_one,
            {"_id": thread_id},
            {
                "$push": {"messages": {"$each": serialized}},
                "$set": {"updated_at": now},
                "$setOnInsert": {"created_at": now},
            },
            upsert=True,
        )
        logger.debug(f"Appended {len(serialized)} messages to thread {thread_id}")


def create_conversation_store(settings: Settings, connection: MongoConnection) -> ConversationStore:
    """Build a conversation store based on configuration."""
    if settings.conversation_store_backend == "memory":
        logger.warning("Using in-memory conversation store; history is lost on restart")
        return InMemoryConversationStore()

    return MongoConversationStore(connection.get_collection(CHECKPOINT_COLLECTION_NAME))
