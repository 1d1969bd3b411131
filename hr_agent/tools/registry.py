"""Tools registry for managing AI assistant tools."""

from typing import Any

from hr_agent.tools.base import ToolDefinition


class ToolsRegistry:
    """Registry for managing AI assistant tools."""

    def __init__(self, tools: list[ToolDefinition] | None = None):
        """Initialize tools registry, optionally with an initial set of tools."""
        self._tools: dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register_tool(tool)

    def register_tool(self, tool: ToolDefinition) -> None:
        """Register a new tool in the registry."""
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> ToolDefinition | None:
        """Look up a tool by name."""
        return self._tools.get(name)

    def get_openai_tools(self) -> list[dict[str, Any]]:
        """Get tool schemas for binding to the chat model."""
        return [tool.to_openai_tool() for tool in self._tools.values()]

    def get_tool_names(self) -> list[str]:
        """Get list of all registered tool names."""
        return list(self._tools.keys())

    def has_tool(self, name: str) -> bool:
        """Check if a tool is registered."""
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
