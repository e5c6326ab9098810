"""Tool response container and its conversion to an MCP ``CallToolResult``."""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent
from pydantic import BaseModel, Field


class ToolResponse(BaseModel):
    text: str
    structured: dict[str, Any] = Field(default_factory=dict)
    is_error: bool = False

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            structuredContent=self.structured,
            isError=self.is_error,
        )


def to_json(data: Any) -> str:
    return json.dumps(data, indent=2, default=str)
