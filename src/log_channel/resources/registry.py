"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from log_channel.core.levels import DEFAULT_REGISTRY
from log_channel.core.viewer import aread_log_file
from log_channel.server.settings import DIR_NAME_ENV, STORAGE_DIR_ENV, log_directory


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://log-channel/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://log-channel/help\n"
            "- app://log-channel/levels\n"
            "- log://{log_file} (bare .log file name inside the log directory)\n"
            f"\nLog directory: {log_directory()}\n"
            f"(set with {STORAGE_DIR_ENV} and {DIR_NAME_ENV})\n"
        )

    @mcp.resource("app://log-channel/levels")
    def levels_resource() -> dict[str, int]:
        """Return the severity level table."""
        return dict(DEFAULT_REGISTRY.all_levels())

    @mcp.resource("log://{log_file}")
    async def read_log(log_file: str) -> str:
        """Return the full contents of one stored log file."""
        return await aread_log_file(log_directory(), log_file)
