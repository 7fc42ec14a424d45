"""MCP server for Srcnav - code navigation over analysis artifacts."""

from srcnav.mcp import serve


def main() -> None:
    """Entry point for mcp-server-srcnav."""
    serve()


__all__ = ["main", "serve"]
