"""Shared fixtures for all tests."""

from unittest.mock import AsyncMock, Mock

import pytest

from hr_agent.tools.base import ToolDefinition
from hr_agent.tools.employee_lookup import EmployeeLookupInput
from hr_agent.tools.registry import ToolsRegistry


@pytest.fixture
def lookup_handler():
    """Async handler standing in for the vector search."""
    return AsyncMock(return_value='[{"record": {"embedding_text": "Jane Doe, Go developer"}, "score": 0.91}]')


@pytest.fixture
def lookup_tool(lookup_handler):
    """employee_lookup tool backed by a mock handler."""
    return ToolDefinition(
        name="employee_lookup",
        description="Gathers employee details from the HR database",
        input_schema_class=EmployeeLookupInput,
        handler=lookup_handler,
    )


@pytest.fixture
def tools_registry(lookup_tool):
    return ToolsRegistry([lookup_tool])


@pytest.fixture
def mock_connection():
    """Opened MongoConnection stand-in."""
    connection = Mock()
    connection.ping = AsyncMock()
    connection.close = AsyncMock()
    connection.get_collection = Mock(return_value=Mock())
    return connection
