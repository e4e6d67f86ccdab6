#!/usr/bin/env python3
"""
Galaxy MCP Server: line array design and beam control for Galaxy processors

Exposes the galaxy-array tools over MCP using stdio transport.
Device host, port and handler come from config.toml (or $GALAXY_CONFIG).
"""
import json
import logging
import sys
import os
from typing import Any

# Add project root to path for galaxy_devices/tools imports
# server.py is at mcp/galaxy-mcp/server.py, so go up 3 levels
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from tools import TOOLS, execute_tool_async
from tools.tool_executor import shutdown

logger = logging.getLogger(__name__)

# Create the MCP server
server = Server("galaxy-array")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools"""
    return [
        Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["input_schema"],
        )
        for tool in TOOLS
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls"""
    try:
        result = await execute_tool_async(name, arguments or {})
    except Exception as e:
        logger.exception("Tool %s failed", name)
        return [TextContent(type="text", text=f"Error: {str(e)}")]

    if result.get("status") == "error" and result.get("message", "").startswith("Unknown tool"):
        return [TextContent(type="text", text=f"Unknown tool: {name}")]
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


async def main():
    """Run the MCP server using stdio transport"""
    # stdout carries the protocol, so logs go to stderr
    logging.basicConfig(level=logging.INFO, stream=sys.stderr,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options()
            )
    finally:
        shutdown()


if __name__ == "__main__":
    import asyncio
    asyncio.run(main())
