"""Agent façade: the only entry point the HTTP layer depends on."""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from langchain_core.embeddings import Embeddings
from langchain_core.language_models import BaseChatModel

from hr_agent.clients.mongo import MongoConnection
from hr_agent.core.errors import AgentNotInitializedError
from hr_agent.services.conversation_store import ConversationStore
from hr_agent.services.turn_controller import DEFAULT_MAX_TURNS, TurnController
from hr_agent.services.vector_search import COLLECTION_NAME, EmployeeVectorSearch
from hr_agent.tools.employee_lookup import create_employee_lookup_tool
from hr_agent.tools.registry import ToolsRegistry
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)


class Agent:
    """HR agent wiring model, retrieval tool, turn controller and conversation store."""

    def __init__(
        self,
        model: BaseChatModel,
        embeddings: Embeddings,
        connection: MongoConnection,
        store: ConversationStore,
        max_turns: int = DEFAULT_MAX_TURNS,
    ):
        """Initialize the agent. Nothing touches the network until initialize().

        Args:
            model: Unbound chat model
            embeddings: Embeddings model matching the indexed employee vectors
            connection: Opened database connection
            store: Conversation persistence backend
            max_turns: Maximum model calls per user message
        """
        self.model = model
        self.embeddings = embeddings
        self.connection = connection
        self.store = store
        self.max_turns = max_turns

        self.tools: ToolsRegistry | None = None
        self.controller: TurnController | None = None
        self._thread_locks: dict[str, asyncio.Lock] = {}
        self._thread_lock_users: dict[str, int] = {}

    @property
    def is_initialized(self) -> bool:
        return self.controller is not None

    async def initialize(self) -> None:
        """Verify the database, register tools and bind them to the model.

        Raises:
            ConfigurationError: If the database cannot be pinged
        """
        await self.connection.ping()

        vector_search = EmployeeVectorSearch(self.connection.get_collection(COLLECTION_NAME), self.embeddings)
        tools = ToolsRegistry([create_employee_lookup_tool(vector_search)])
        bound_model = self.model.bind_tools(tools.get_openai_tools())

        self.tools = tools
        self.controller = TurnController(bound_model, tools, max_turns=self.max_turns)
        logger.info(f"Agent initialized with tools: {', '.join(tools.get_tool_names())}")

    async def send_message(self, text: str, thread_id: str) -> str:
        """Answer a user message within a thread and persist the turn.

        Args:
            text: The user's message
            thread_id: Conversation identifier; unseen ids start a new thread

        Returns:
            The model's final reply

        Raises:
            AgentNotInitializedError: If initialize() has not completed
            TurnLimitExceededError: If the model never stops requesting tools
        """
        if self.controller is None:
            raise AgentNotInitializedError()

        async with self._thread_lock(thread_id):
            history = await self.store.load(thread_id)
            logger.info(f"Processing message for thread {thread_id} ({len(history)} history messages)")

            result = await self.controller.run(history, text)
            await self.store.append(thread_id, result.messages)

        logger.info(
            f"Thread {thread_id} answered in {result.turns} model calls - "
            f"Input tokens: {result.usage.input_tokens}, Output tokens: {result.usage.output_tokens}"
        )
        return result.content

    @asynccontextmanager
    async def _thread_lock(self, thread_id: str) -> AsyncIterator[None]:
        """Hold the thread's lock; the entry is dropped once no task holds or waits on it."""
        lock = self._thread_locks.setdefault(thread_id, asyncio.Lock())
        self._thread_lock_users[thread_id] = self._thread_lock_users.get(thread_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._thread_lock_users[thread_id] -= 1
            if not self._thread_lock_users[thread_id]:
                del self._thread_lock_users[thread_id]
                del self._thread_locks[thread_id]
