"""
MCP server for Srcnav.

Exposes code navigation queries to LLMs via the Model Context Protocol.

Tools:
    - srcnav_describe: Definition and examples for the reference at a position
    - srcnav_list_refs: All references in a file

Usage:
    Install: pip install srcnav
    Run: mcp-server-srcnav
"""

import asyncio

from srcnav.mcp.server import serve as _serve


def serve() -> None:
    """Entry point for the MCP server."""
    asyncio.run(_serve())


__all__ = ["serve"]
