"""Conversation turn controller: the Reasoning / Tooling / Done loop."""

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime
from enum import Enum

from langchain_core.language_models import LanguageModelInput
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, InvalidToolCall, ToolCall, ToolMessage
from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder
from langchain_core.runnables import Runnable

from hr_agent.core.errors import AgentError, TurnLimitExceededError
from hr_agent.models.llm import AgentLoopResult, LLMUsage
from hr_agent.tools.registry import ToolsRegistry
from hr_agent.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_TURNS = 15

SYSTEM_PREAMBLE = (
    "You are a helpful AI assistant, collaborating with other assistants. Use the provided tools to progress "
    "towards answering the question. If you are unable to fully answer, that's OK, another assistant with "
    "different tools will help where you left off. Execute what you can to make progress. If you or any of the "
    "other assistants have the final answer or deliverable, prefix your response with FINAL ANSWER so the team "
    "knows to stop. You have access to the following tools: {tool_names}.\n{system_message}\nCurrent time: {time}."
)

HR_SYSTEM_MESSAGE = "You are helpful HR Chatbot Agent."


class TurnState(Enum):
    """States of a single conversation turn."""

    REASONING = "reasoning"
    TOOLING = "tooling"
    DONE = "done"


class TurnController:
    """Runs one conversation turn until the model answers without requesting tools."""

    def __init__(
        self,
        model: Runnable[LanguageModelInput, BaseMessage],
        tools: ToolsRegistry,
        max_turns: int = DEFAULT_MAX_TURNS,
        system_message: str = HR_SYSTEM_MESSAGE,
    ):
        """Initialize the controller.

        Args:
            model: Chat model with the registry's tools already bound
            tools: Registry used to execute requested tool calls
            max_turns: Maximum number of model calls per turn
            system_message: Role description rendered into the preamble
        """
        self.model = model
        self.tools = tools
        self.max_turns = max_turns
        self.system_message = system_message
        self.prompt = ChatPromptTemplate.from_messages(
            [
                ("system", SYSTEM_PREAMBLE),
                MessagesPlaceholder("messages"),
            ]
        )

    async def format_prompt(self, messages: Sequence[BaseMessage]) -> list[BaseMessage]:
        """Render the system preamble followed by the full message history."""
        return await self.prompt.aformat_messages(
            system_message=self.system_message,
            time=datetime.now(UTC).isoformat(),
            tool_names=", ".join(self.tools.get_tool_names()),
            messages=list(messages),
        )

    async def run(self, history: Sequence[BaseMessage], message: str) -> AgentLoopResult:
        """Execute a turn for a new human message on top of the thread history.

        Args:
            history: Previously persisted messages of the thread
            message: The user's new message

        Returns:
            Final answer plus every message the turn produced (human, assistant, tool)

        Raises:
            TurnLimitExceededError: If the model still requests tools after max_turns calls
        """
        new_messages: list[BaseMessage] = [HumanMessage(content=message)]
        usage = LLMUsage()
        turns = 0
        state = TurnState.REASONING
        response: AIMessage | None = None

        logger.info(f"Starting turn with {len(history)} history messages, max_turns: {self.max_turns}")

        while state is not TurnState.DONE:
            if state is TurnState.REASONING:
                if turns >= self.max_turns:
                    logger.warning(f"Turn reached max turns ({self.max_turns}) without a final answer")
                    raise TurnLimitExceededError(self.max_turns)

                turns += 1
                logger.debug(f"Reasoning step {turns}/{self.max_turns}")
                prompt = await self.format_prompt([*history, *new_messages])
                response = await self.model.ainvoke(prompt)
                usage.add(response)
                new_messages.append(response)

                state = TurnState.TOOLING if response.tool_calls or response.invalid_tool_calls else TurnState.DONE

            elif state is TurnState.TOOLING:
                logger.info(
                    f"Model requested {len(response.tool_calls)} tool calls "
                    f"({len(response.invalid_tool_calls)} unparsable)"
                )
                new_messages.extend(await self.execute_tool_calls(response.tool_calls))
                new_messages.extend(self.reject_invalid_tool_calls(response.invalid_tool_calls))
                state = TurnState.REASONING

        logger.info(f"Turn completed in {turns} model calls")
        return AgentLoopResult(
            content=_content_text(response),
            messages=new_messages,
            turns=turns,
            usage=usage,
        )

    async def execute_tool_calls(self, tool_calls: Sequence[ToolCall]) -> list[ToolMessage]:
        """Run the requested calls concurrently; results come back in request order."""
        return list(await asyncio.gather(*(self._execute_tool_call(call) for call in tool_calls)))

    def reject_invalid_tool_calls(self, invalid_tool_calls: Sequence[InvalidToolCall]) -> list[ToolMessage]:
        """Answer each unparsable tool call with an error result so every request has a reply."""
        messages = []
        for call in invalid_tool_calls:
            logger.error(f"Unparsable tool call {call.get('name')}: {call.get('error')}")
            messages.append(
                ToolMessage(
                    content=f"Error: {call.get('error') or 'Tool arguments could not be parsed'}",
                    tool_call_id=call.get("id") or "",
                    name=call.get("name") or "",
                    status="error",
                )
            )
        return messages

    async def _execute_tool_call(self, call: ToolCall) -> ToolMessage:
        tool_name = call["name"]
        tool = self.tools.get_tool(tool_name)

        if tool is None:
            logger.error(f"Unknown tool requested: {tool_name}")
            return ToolMessage(
                content=f"Error: Unknown tool {tool_name}",
                tool_call_id=call["id"],
                name=tool_name,
                status="error",
            )

        logger.debug(f"Executing tool: {tool_name} with input: {call['args']}")
        try:
            result = await tool.run(call["args"])
        except AgentError as e:
            logger.error(f"Tool {tool_name} failed: {e}")
            return ToolMessage(
                content=f"Error: {e.message}",
                tool_call_id=call["id"],
                name=tool_name,
                status="error",
            )

        logger.debug(f"Tool {tool_name} succeeded: {result[:100]}...")
        return ToolMessage(content=result, tool_call_id=call["id"], name=tool_name)


def _content_text(message: AIMessage) -> str:
    """Final answer text; content blocks are joined when the provider returns a list."""
    if isinstance(message.content, str):
        return message.content
    parts = []
    for block in message.content:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)
