"""
MCP Server module for promptform.

Provides Model Context Protocol server implementation
with stdio and SSE transport support.
"""

from promptform.mcp_server.server import create_mcp_server, run_mcp_server
from promptform.mcp_server.tools import get_mcp_tools

__all__ = [
    "create_mcp_server",
    "run_mcp_server",
    "get_mcp_tools",
]
