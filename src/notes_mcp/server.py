"""FastMCP server with lifespan management and tool registration."""

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastmcp import FastMCP

from notes_mcp.config import (
    get_insert_position,
    get_log_level,
    get_memory_path,
    load_search_settings,
)
from notes_mcp.tools.notes_add import register_notes_add
from notes_mcp.tools.notes_browse import register_notes_browse
from notes_mcp.tools.notes_search import register_notes_search


def build_context() -> dict[str, Any]:
    """Resolve configuration once into the context shared by all tools."""
    return {
        "memory_path": get_memory_path(),
        "settings": load_search_settings(),
        "insert_position": get_insert_position(),
    }


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    """Configure logging and resolve settings for the server's lifetime."""
    # Configure logging to stderr (stdout is MCP stdio transport)
    logging.basicConfig(
        level=getattr(logging, get_log_level()),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger = logging.getLogger(__name__)

    context = build_context()
    if context["memory_path"] is None:
        logger.warning("NOTES_DIRECTORY not set; tools will report a configuration error")
    else:
        logger.info("Using memory log at %s", context["memory_path"])

    try:
        yield context
    finally:
        logger.info("Notes MCP server stopped")


_INSTRUCTIONS = """\
This server exposes a personal memory log: a single markdown file of dated, \
tagged entries written as `## YYYY-MM-DD HH:mm #tag1 #tag2 @YYYY-MM-DD`.

QUERYING — pick the right tool:
- structure_search_notes: Ranked search by approximate intent. Mix tags, \
dates, months and keywords in one query (e.g. "#todo 2026-02 経費"). Results \
carry a score and the reasons each entry matched.
- search_notes: Exact filtering by tag, date prefix or range, and keyword.
- get_recent_notes, get_notes_by_tag, list_tags: Quick lookups.
- get_notes_structure: Browse month → tag → entries.
- get_reminders: Entries whose @YYYY-MM-DD reminder falls in the next N days.

WRITING:
- add_note: Append a dated entry with optional tags and reminder date.
"""


def create_server() -> FastMCP:
    """Create and configure the MCP server with all tools."""
    mcp = FastMCP(
        "notes-mcp",
        instructions=_INSTRUCTIONS,
        lifespan=lifespan,
    )

    register_notes_search(mcp)
    register_notes_browse(mcp)
    register_notes_add(mcp)

    return mcp
