"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP


def _format_levels(levels: Sequence[str] | str) -> str:
    """Return levels as a JSON array literal for prompt display."""
    if isinstance(levels, str):
        items = [s.strip().upper() for s in levels.split(",") if s.strip()]
    else:
        items = [str(s).strip().upper() for s in levels if str(s).strip()]
    if not items:
        return "[]"
    quoted = ", ".join(f'"{item}"' for item in items)
    return f"[{quoted}]"


def build_review_prompt(log_file: str, levels: Sequence[str] | str) -> list[dict[str, Any]]:
    """Build the message list for reviewing one stored log file."""
    return [
        {
            "role": "system",
            "content": (
                "You are a careful assistant reviewing application logs. "
                "Summarize what the records show. Do not invent details; "
                "if the evidence is insufficient, say so."
            ),
        },
        {
            "role": "user",
            "content": (
                "Review the log file using view_log_file. Follow this workflow:\n"
                "- Call view_log_file first with the parameters below and include_raw set to true.\n"
                "- If the result holds an error, report it and call list_log_files instead.\n"
                "- Quote only lines returned by the tool.\n\n"
                "Call view_log_file with:\n"
                f"- log_file: {log_file}\n"
                f"- levels: {_format_levels(levels)}\n\n"
                "Return this structure:\n"
                "1) What happened (1-3 bullets)\n"
                "2) Evidence (2-5 quoted lines with line_no)\n"
                "3) Next actions (1-3 bullets)\n"
            ),
        },
        {
            "role": "user",
            "content": [
                {"type": "text", "text": "Optional: the raw file is available as:"},
                {"type": "resource", "uri": f"log://{log_file}"},
            ],
        },
    ]


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def review_log_file(
        log_file: str,
        levels: Sequence[str] | str = ("WARNING", "ERROR", "CRITICAL", "ALERT", "EMERGENCY"),
    ) -> list[dict[str, Any]]:
        """Build a prompt that reviews one stored log file."""
        return build_review_prompt(log_file, levels)
