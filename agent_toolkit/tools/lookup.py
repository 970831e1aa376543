"""
Placeholder lookup tools used by demos and by the Plan-and-Execute keyword rules.

They echo their input so agent wiring can be exercised without network access.
"""

from __future__ import annotations

from ..core.primitives.tools import BaseTool


class SearchTool(BaseTool):
    name = "search"
    description = "Searches the web for information"

    def execute(self, tool_input: str) -> str:
        return f"Search results for: {tool_input}"


class WeatherTool(BaseTool):
    name = "weather"
    description = "Gets weather information for a location"

    def execute(self, tool_input: str) -> str:
        return f"Weather for: {tool_input}"


class DatabaseTool(BaseTool):
    name = "database"
    description = "Executes database queries"

    def execute(self, tool_input: str) -> str:
        return f"Database query result for: {tool_input}"
