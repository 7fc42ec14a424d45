"""MCP server implementation for Srcnav."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from srcnav.config import load_settings
from srcnav.core import Navigator, SrcnavError
from srcnav.remote import HTTPDefinitionClient

server = Server("srcnav")


def _resolve_file(file: str) -> Path:
    """Resolve a tool argument path against the server's working directory."""
    path = Path(file)
    if not path.is_absolute():
        path = Path.cwd() / path
    return path


@server.list_tools()  # type: ignore[no-untyped-call, untyped-decorator]
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="srcnav_describe",
            description=(
                "Describe the definition referred to by the reference at a byte offset "
                "in a file. Returns the definition (with documentation) and usage examples, "
                "or an empty object when no reference is at that position."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "file": {
                        "type": "string",
                        "description": "Path of the file containing the position",
                    },
                    "start_byte": {
                        "type": "integer",
                        "minimum": 0,
                        "description": "Byte offset of the position",
                    },
                    "no_examples": {
                        "type": "boolean",
                        "description": "Skip fetching usage examples (default false)",
                    },
                },
                "required": ["file", "start_byte"],
            },
        ),
        Tool(
            name="srcnav_list_refs",
            description="List every reference in a file with its byte span and target.",
            inputSchema={
                "type": "object",
                "properties": {
                    "file": {
                        "type": "string",
                        "description": "Path of the file to list references for",
                    },
                },
                "required": ["file"],
            },
        ),
    ]


@server.call_tool()  # type: ignore[untyped-decorator]
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls.

    Queries may build and hit the network, so they run in a worker thread to
    keep the stdio loop serving.
    """
    try:
        if name == "srcnav_describe":
            result: Any = await asyncio.to_thread(
                _handle_describe,
                arguments["file"],
                int(arguments["start_byte"]),
                bool(arguments.get("no_examples", False)),
            )
        elif name == "srcnav_list_refs":
            result = await asyncio.to_thread(_handle_list_refs, arguments["file"])
        else:
            result = {"error": f"Unknown tool: {name}"}

        return [TextContent(type="text", text=json.dumps(result, indent=2))]

    except SrcnavError as e:
        return [TextContent(type="text", text=json.dumps({"error": str(e)}))]
    except (KeyError, ValueError) as e:
        return [TextContent(type="text", text=json.dumps({"error": f"Bad arguments: {e}"}))]


def _handle_describe(file: str, start_byte: int, no_examples: bool) -> dict[str, Any]:
    """Handle srcnav_describe tool."""
    path = _resolve_file(file)
    settings = load_settings()
    with HTTPDefinitionClient(settings.api_url, settings.api_timeout) as client:
        nav = Navigator.for_file(path, settings, client)
        return nav.describe(path, start_byte, include_examples=not no_examples).to_dict()


def _handle_list_refs(file: str) -> dict[str, Any]:
    """Handle srcnav_list_refs tool."""
    path = _resolve_file(file)
    settings = load_settings()
    with HTTPDefinitionClient(settings.api_url, settings.api_timeout) as client:
        nav = Navigator.for_file(path, settings, client)
        return {"refs": [r.to_dict() for r in nav.list_refs(path)]}


async def serve() -> None:
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())
