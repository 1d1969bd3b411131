"""Employee lookup tool."""

from pydantic import BaseModel, Field

from hr_agent.services.vector_search import DEFAULT_RESULT_COUNT, EmployeeVectorSearch
from hr_agent.tools.base import ToolDefinition


class EmployeeLookupInput(BaseModel):
    """Input schema for the employee lookup tool."""

    query: str = Field(
        ...,
        min_length=1,
        description="The search query",
        examples=["Go developer", "iOS engineer with Swift experience"],
    )
    n: int = Field(
        default=DEFAULT_RESULT_COUNT,
        gt=0,
        description="Number of results to return",
    )


def create_employee_lookup_tool(vector_search: EmployeeVectorSearch) -> ToolDefinition:
    async def employee_lookup_handler(params: EmployeeLookupInput) -> str:
        return await vector_search.lookup(params.query, params.n)

    return ToolDefinition(
        name="employee_lookup",
        description="Gathers employee details from the HR database",
        input_schema_class=EmployeeLookupInput,
        handler=employee_lookup_handler,
    )
