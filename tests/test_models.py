"""Tests for data models."""

import json
from datetime import UTC, datetime

import pytest
from helpers import tool_call_message
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage
from pydantic import ValidationError

from hr_agent.core.errors import ToolExecutionError, ToolInputError, TurnLimitExceededError
from hr_agent.models.conversation import ChatRequest, HealthResponse, StartChatResponse
from hr_agent.models.llm import LLMUsage, RetrievalResult
from hr_agent.models.messages import deserialize_messages, serialize_messages
from hr_agent.tools.employee_lookup import EmployeeLookupInput
from hr_agent.tools.registry import ToolsRegistry


class TestConversationModels:
    """Tests for chat request/response models."""

    def test_chat_request_from_json(self):
        """Test chat request parsing from JSON."""
        data = json.loads('{"message": "Find me a data engineer"}')
        request = ChatRequest.model_validate(data)
        assert request.message == "Find me a data engineer"

    def test_chat_request_requires_message(self):
        """Test that message is required."""
        with pytest.raises(ValidationError):
            ChatRequest.model_validate({})

    def test_start_chat_response_uses_camel_case(self):
        """Test that the thread id is serialized as threadId."""
        response = StartChatResponse(thread_id="1718000000000", response="Hi!")
        assert response.model_dump(by_alias=True) == {"threadId": "1718000000000", "response": "Hi!"}

    def test_start_chat_response_accepts_alias(self):
        """Test that the model can be built from its wire form."""
        response = StartChatResponse.model_validate({"threadId": "42", "response": "ok"})
        assert response.thread_id == "42"

    def test_health_response_valid(self):
        """Test valid health response."""
        now = datetime.now(UTC)
        response = HealthResponse(status="healthy", timestamp=now, version="0.1.0")
        assert response.status == "healthy"
        assert response.timestamp == now


class TestMessageSerialization:
    """Tests for persisted message form."""

    def test_round_trip_keeps_tool_linkage(self):
        """Test that roles, tool calls and tool_call_id survive storage."""
        messages = [
            HumanMessage(content="Who knows Rust?"),
            tool_call_message(("call_1", "employee_lookup", {"query": "Rust", "n": 3})),
            ToolMessage(content="boom", tool_call_id="call_1", name="employee_lookup", status="error"),
            AIMessage(content="Search failed."),
        ]

        restored = deserialize_messages(serialize_messages(messages))

        assert [type(m) for m in restored] == [HumanMessage, AIMessage, ToolMessage, AIMessage]
        assert restored[1].tool_calls[0]["name"] == "employee_lookup"
        assert restored[1].tool_calls[0]["args"] == {"query": "Rust", "n": 3}
        assert restored[2].tool_call_id == "call_1"
        assert restored[2].status == "error"

    def test_serialized_form_is_plain_data(self):
        """Test that stored messages are JSON-compatible dicts."""
        data = serialize_messages([HumanMessage(content="hello")])
        assert json.loads(json.dumps(data)) == data
        assert data[0]["type"] == "human"

    def test_system_messages_are_rejected(self):
        """Test that the preamble is never stored."""
        with pytest.raises(ValueError, match="System messages"):
            serialize_messages([SystemMessage(content="You are helpful HR Chatbot Agent.")])


class TestLLMModels:
    """Tests for turn bookkeeping models."""

    def test_usage_ignores_missing_metadata(self):
        """Test that responses without usage leave totals at zero."""
        usage = LLMUsage()
        usage.add(AIMessage(content="no usage"))
        assert (usage.input_tokens, usage.output_tokens, usage.total_tokens) == (0, 0, 0)

    def test_usage_accumulates(self):
        """Test that usage sums over several responses."""
        usage = LLMUsage()
        for _ in range(2):
            usage.add(
                AIMessage(content="x", usage_metadata={"input_tokens": 10, "output_tokens": 5, "total_tokens": 15})
            )
        assert usage.total_tokens == 30

    def test_retrieval_result_as_dict(self):
        result = RetrievalResult(record={"embedding_text": "Jane"}, score=0.8)
        assert result.as_dict() == {"record": {"embedding_text": "Jane"}, "score": 0.8}


class TestToolInputModels:
    """Tests for tool input validation."""

    def test_employee_lookup_defaults(self):
        """Test that n defaults to 10."""
        params = EmployeeLookupInput(query="backend engineer")
        assert params.n == 10

    def test_employee_lookup_rejects_empty_query(self):
        with pytest.raises(ValidationError):
            EmployeeLookupInput(query="")

    def test_employee_lookup_rejects_non_positive_n(self):
        with pytest.raises(ValidationError):
            EmployeeLookupInput(query="designer", n=0)


class TestToolsRegistry:
    """Tests for the tools registry."""

    def test_registry_lookup(self, lookup_tool):
        """Test registration and lookup by name."""
        registry = ToolsRegistry()
        registry.register_tool(lookup_tool)

        assert len(registry) == 1
        assert registry.has_tool("employee_lookup")
        assert registry.get_tool("employee_lookup") is lookup_tool
        assert registry.get_tool("payroll_lookup") is None
        assert registry.get_tool_names() == ["employee_lookup"]

    def test_openai_tool_schemas(self, tools_registry):
        """Test that every tool is exposed in function-calling form."""
        tools = tools_registry.get_openai_tools()
        assert len(tools) == 1
        assert tools[0]["function"]["name"] == "employee_lookup"
        assert "query" in tools[0]["function"]["parameters"]["properties"]


class TestErrors:
    """Tests for error messages."""

    def test_turn_limit_message(self):
        error = TurnLimitExceededError(15)
        assert error.message == "Agent did not produce a final answer within 15 turns"

    def test_tool_input_message(self):
        """Test that validation details are flattened into the message."""
        error = ToolInputError("employee_lookup", [{"loc": ("query",), "msg": "Field required"}])
        assert error.message == "Invalid arguments for employee_lookup: query: Field required"

    def test_tool_execution_message(self):
        error = ToolExecutionError("employee_lookup", "timeout")
        assert str(error) == "employee_lookup failed: timeout"
