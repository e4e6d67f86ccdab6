"""
Tool definitions and executors for Galaxy array control
Shared by the MCP server and any LLM tool-use client
"""

from .tool_definitions import TOOLS
from .tool_executor import execute_tool, execute_tool_async

__all__ = ["TOOLS", "execute_tool", "execute_tool_async"]
