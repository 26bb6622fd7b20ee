"""add_note MCP tool — appends a new entry to the memory log."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from notes_mcp.memory.writer import InsertPosition, append_entry
from notes_mcp.tools.formatters import NOT_CONFIGURED_ERROR, dump_json, format_error, serialize_model

logger = logging.getLogger(__name__)


def run_add_note(
    memory_path: Path | None,
    content: str,
    tags: list[str] | None = None,
    reminder_date: str | None = None,
    position: InsertPosition = InsertPosition.TOP,
    now: datetime | None = None,
) -> str:
    """Append an entry, reporting invalid input as an error payload."""
    if memory_path is None:
        return format_error(NOT_CONFIGURED_ERROR)
    try:
        entry = append_entry(memory_path, content, tags, reminder_date, position, now)
    except ValueError as e:
        logger.info("Rejected note: %s", e)
        return format_error(str(e))
    logger.info("Added entry %s at line %d", entry.timestamp, entry.position + 1)
    return dump_json({"added": serialize_model(entry), "line": entry.position + 1})


def register_notes_add(mcp: FastMCP) -> None:
    """Register the add_note tool with the MCP server."""

    @mcp.tool()
    async def add_note(
        content: Annotated[str, Field(description="Entry text")],
        tags: Annotated[
            list[str] | None, Field(description="Tags, with or without the leading #")
        ] = None,
        reminder_date: Annotated[
            str | None, Field(description="Reminder date (YYYY-MM-DD)")
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Add a dated entry to the memory log.

        The entry is stamped with the current local time and inserted at the
        top (after the document title) or bottom of the file, depending on
        the NOTES_INSERT_POSITION setting.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        lifespan = ctx.lifespan_context
        return run_add_note(
            lifespan["memory_path"],
            content,
            tags,
            reminder_date,
            lifespan["insert_position"],
        )
