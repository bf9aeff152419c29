"""Admin server entrypoint (stdio transport).

Exposes the log viewer to an MCP client:
- Tools: list, view and delete stored log files
- Resources: help, level table and raw file contents
- Prompts: a review template for one file

Run locally (stdio):
    python -m log_channel
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from log_channel.prompts.registry import register_prompts
from log_channel.resources.registry import register_resources
from log_channel.server.settings import LOG_LEVEL_ENV, log_directory
from log_channel.tools.viewer import delete_log_impl, list_logs_impl, view_log_impl

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    """Configure diagnostics on stderr; stdout belongs to the stdio transport."""
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


mcp = FastMCP("log-channel", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def list_log_files() -> dict[str, Any]:
    """List the stored log files, newest first.

    Returns
    -------
    dict:
        {"directory": str, "count": int, "files": list[str]}
    """
    return list_logs_impl(directory=log_directory())


@mcp.tool()
def view_log_file(
    log_file: str,
    levels: Sequence[str] | None = None,
    contains: str | None = None,
    limit: int | None = None,
    include_raw: bool = False,
) -> dict[str, Any]:
    """Return the records of one stored log file.

    Parameters
    ----------
    log_file:
        Bare file name as returned by list_log_files.
    levels:
        Filter by level names (e.g., ["error", "warning"]). Case-insensitive.
    contains:
        Substring filter applied to the stored text of each record.
    limit:
        Maximum number of entries returned (hard-capped in the implementation).
    include_raw:
        Whether to include the stored line(s) of each record.
    """
    return view_log_impl(
        directory=log_directory(),
        log_file=log_file,
        levels=levels,
        contains=contains,
        limit=limit,
        include_raw=include_raw,
    )


@mcp.tool()
def delete_log_file(log: str) -> dict[str, Any]:
    """Delete one stored log file and return the remaining listing."""
    result = delete_log_impl(directory=log_directory(), log=log)
    if result.get("deleted"):
        LOGGER.info("Deleted log file %s", result["file"])
    return result


def main() -> None:
    """Start the admin server over stdio."""
    _configure_logging()
    LOGGER.debug("Starting admin server (transport=stdio, directory=%s)", log_directory())
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
