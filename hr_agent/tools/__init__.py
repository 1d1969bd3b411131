"""Tools for the conversational AI assistant."""

from hr_agent.tools.base import ToolDefinition
from hr_agent.tools.employee_lookup import EmployeeLookupInput, create_employee_lookup_tool
from hr_agent.tools.registry import ToolsRegistry

__all__ = ["EmployeeLookupInput", "ToolDefinition", "ToolsRegistry", "create_employee_lookup_tool"]
