"""Read-only browsing tools: recent notes, tags, reminders, month structure."""

from datetime import date
from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from notes_mcp.memory.parser import read_entries
from notes_mcp.memory.queries import (
    entries_with_tag,
    list_months,
    list_tags,
    month_tag_entries,
    month_tags,
    recent_entries,
    reminders_due,
)
from notes_mcp.tools.formatters import NOT_CONFIGURED_ERROR, dump_json, format_error, format_models


def run_get_notes_structure(
    memory_path: Path | None, month: str | None = None, tag: str | None = None
) -> str:
    """Walk the month → tag → entry tree one level at a time.

    No arguments lists months; a month lists its tags; month and tag list
    the matching entries, newest first.
    """
    if memory_path is None:
        return format_error(NOT_CONFIGURED_ERROR)
    entries = read_entries(memory_path)
    if not month:
        return dump_json(list_months(entries))
    if not tag:
        return dump_json(month_tags(entries, month))
    return format_models(month_tag_entries(entries, month, tag))


def run_get_reminders(
    memory_path: Path | None,
    days_ahead: int = 7,
    include_overdue: bool = False,
    today: date | None = None,
) -> str:
    if memory_path is None:
        return format_error(NOT_CONFIGURED_ERROR)
    reminders = reminders_due(
        read_entries(memory_path),
        days_ahead=days_ahead,
        today=today,
        include_overdue=include_overdue,
    )
    return format_models(reminders)


def register_notes_browse(mcp: FastMCP) -> None:
    """Register the browsing tools with the MCP server."""

    @mcp.tool()
    async def get_recent_notes(
        limit: Annotated[int, Field(description="Number of entries (default 5)")] = 5,
        ctx: Context | None = None,
    ) -> str:
        """Get the most recent memory entries."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        memory_path = ctx.lifespan_context["memory_path"]
        if memory_path is None:
            return format_error(NOT_CONFIGURED_ERROR)
        return format_models(recent_entries(read_entries(memory_path), limit))

    @mcp.tool()
    async def get_notes_by_tag(
        tag: Annotated[str, Field(description="Tag name (without #)")],
        ctx: Context | None = None,
    ) -> str:
        """Get all notes with a specific tag."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        memory_path = ctx.lifespan_context["memory_path"]
        if memory_path is None:
            return format_error(NOT_CONFIGURED_ERROR)
        return format_models(entries_with_tag(read_entries(memory_path), tag))

    @mcp.tool()
    async def get_reminders(
        days_ahead: Annotated[int, Field(description="Days to look ahead (default 7)")] = 7,
        include_overdue: Annotated[
            bool, Field(description="Also return reminders whose date has passed")
        ] = False,
        ctx: Context | None = None,
    ) -> str:
        """Get notes with upcoming reminders (@YYYY-MM-DD format)."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        return run_get_reminders(ctx.lifespan_context["memory_path"], days_ahead, include_overdue)

    @mcp.tool(name="list_tags")
    async def list_tags_tool(ctx: Context | None = None) -> str:
        """List all unique tags in the memory file."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        memory_path = ctx.lifespan_context["memory_path"]
        if memory_path is None:
            return format_error(NOT_CONFIGURED_ERROR)
        return dump_json(list_tags(read_entries(memory_path)))

    @mcp.tool()
    async def get_notes_structure(
        month: Annotated[
            str | None, Field(description="Month to open (YYYY-MM); omit to list months")
        ] = None,
        tag: Annotated[
            str | None, Field(description="Tag within the month; omit to list the month's tags")
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Browse entries by month, then by tag within the month."""
        if ctx is None:
            raise RuntimeError("Context not injected")
        return run_get_notes_structure(ctx.lifespan_context["memory_path"], month, tag)
