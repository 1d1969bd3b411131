"""Base types and definitions for tools."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ValidationError

from hr_agent.core.errors import AgentError, ToolExecutionError, ToolInputError

ToolHandler = Callable[[Any], Awaitable[str]]


@dataclass
class ToolDefinition:
    """Definition of a tool available to the AI assistant."""

    name: str
    description: str
    input_schema_class: type[BaseModel]
    handler: ToolHandler

    def get_json_schema(self) -> dict[str, Any]:
        """Get JSON schema for this tool's input."""
        return self.input_schema_class.model_json_schema()

    def to_openai_tool(self) -> dict[str, Any]:
        """Schema in the function-calling format accepted by bind_tools."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.get_json_schema(),
            },
        }

    def parse_input(self, raw_input: dict[str, Any]) -> BaseModel:
        """Parse and validate tool input.

        Raises:
            ToolInputError: If the arguments don't match the input schema
        """
        try:
            return self.input_schema_class.model_validate(raw_input)
        except ValidationError as e:
            raise ToolInputError(self.name, e.errors(include_url=False)) from e

    async def run(self, raw_input: dict[str, Any]) -> str:
        """Validate arguments and execute the handler.

        Raises:
            ToolInputError: If the arguments are invalid
            ToolExecutionError: If the handler fails
        """
        params = self.parse_input(raw_input)
        try:
            return await self.handler(params)
        except AgentError:
            raise
        except Exception as e:
            raise ToolExecutionError(self.name, str(e)) from e
