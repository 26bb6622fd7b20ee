"""search_notes and structure_search_notes MCP tools."""

import logging
from datetime import datetime
from pathlib import Path
from typing import Annotated

from fastmcp import FastMCP
from fastmcp.server.context import Context
from pydantic import Field

from notes_mcp.memory.parser import read_entries
from notes_mcp.memory.queries import filter_entries
from notes_mcp.models.search import SearchSettings, WeightOverrides
from notes_mcp.search.ranker import rank_entries
from notes_mcp.tools.formatters import (
    NOT_CONFIGURED_ERROR,
    format_error,
    format_models,
    format_search_response,
)

logger = logging.getLogger(__name__)


def run_search_notes(
    memory_path: Path | None,
    query: str | None = None,
    tag: str | None = None,
    date: str | None = None,
    limit: int = 10,
) -> str:
    """Exact-match search behind the search_notes tool."""
    if memory_path is None:
        return format_error(NOT_CONFIGURED_ERROR)
    entries = filter_entries(read_entries(memory_path), query=query, tag=tag, date_input=date)
    return format_models(entries[: max(limit, 0)])


def run_structure_search(
    memory_path: Path | None,
    settings: SearchSettings,
    query: str,
    limit: int = 10,
    include_recency_bonus: bool | None = None,
    synonyms: list[str] | None = None,
    weights: WeightOverrides | None = None,
    now: datetime | None = None,
) -> str:
    """Relevance search behind the structure_search_notes tool."""
    if memory_path is None:
        return format_error(NOT_CONFIGURED_ERROR)
    response = rank_entries(
        read_entries(memory_path),
        query,
        limit=limit,
        include_recency_bonus=include_recency_bonus,
        synonyms=synonyms,
        weights=weights,
        settings=settings,
        now=now,
    )
    if not response.ok:
        logger.info("Rejected structure search: %s", response.error)
    return format_search_response(response)


def register_notes_search(mcp: FastMCP) -> None:
    """Register the search tools with the MCP server."""

    @mcp.tool()
    async def search_notes(
        query: Annotated[
            str | None, Field(description="Search query (keyword or tag like #todo)")
        ] = None,
        tag: Annotated[str | None, Field(description="Filter by specific tag (without #)")] = None,
        date: Annotated[
            str | None,
            Field(description="Filter by date prefix (YYYY-MM-DD) or range (YYYY-MM-DD to YYYY-MM-DD)"),
        ] = None,
        limit: Annotated[int, Field(description="Max results (default 10)")] = 10,
        ctx: Context | None = None,
    ) -> str:
        """Search memory notes by tag, date, or keyword.

        Exact filtering: the keyword must appear in the entry text or a tag.
        For ranked, approximate matching use structure_search_notes.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        lifespan = ctx.lifespan_context
        return run_search_notes(lifespan["memory_path"], query, tag, date, limit)

    @mcp.tool()
    async def structure_search_notes(
        query: Annotated[str, Field(description="Search query (e.g. '#todo 2026-02 経費')")],
        limit: Annotated[
            int, Field(description="Max results (default 10, range 1-200)")
        ] = 10,
        include_recency_bonus: Annotated[
            bool | None, Field(description="Apply recency bonus (default true)")
        ] = None,
        synonyms: Annotated[
            list[str] | None,
            Field(description="Custom synonym rules, format: key:syn1,syn2"),
        ] = None,
        weights: Annotated[
            WeightOverrides | None, Field(description="Score weight overrides")
        ] = None,
        ctx: Context | None = None,
    ) -> str:
        """Structure-aware search with score/reasons, synonym expansion, and tunable weights.

        Each query token is matched against entry tags (exact, then partial),
        the entry date and month, and the entry text. Scores add up per
        signal, with bonuses for matching several tokens and for recent
        entries. Results carry the reasons they matched.
        """
        if ctx is None:
            raise RuntimeError("Context not injected")
        lifespan = ctx.lifespan_context
        return run_structure_search(
            lifespan["memory_path"],
            lifespan["settings"],
            query,
            limit=limit,
            include_recency_bonus=include_recency_bonus,
            synonyms=synonyms,
            weights=weights,
        )
