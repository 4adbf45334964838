"""Tool catalogue and dispatch table"""

from .catalog import PUBLIC_TOOLS, TOOLS, TOOLS_BY_NAME, ToolDefinition
from .dispatch import DISPATCH_TABLE, ToolName, ToolResult, handle_tool_call, invoke_tool

__all__ = [
    "DISPATCH_TABLE",
    "PUBLIC_TOOLS",
    "TOOLS",
    "TOOLS_BY_NAME",
    "ToolDefinition",
    "ToolName",
    "ToolResult",
    "handle_tool_call",
    "invoke_tool",
]
