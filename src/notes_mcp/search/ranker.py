"""Structured relevance search: tokenize, expand, score, rank."""

import logging
from collections.abc import Sequence
from datetime import datetime

from notes_mcp.memory.parser import parse_entries
from notes_mcp.models.entry import LogEntry
from notes_mcp.models.search import SearchResponse, SearchSettings, WeightOverrides
from notes_mcp.search.scorer import score_entry
from notes_mcp.search.synonyms import build_synonym_map, expand_tokens
from notes_mcp.search.tokenizer import tokenize_query
from notes_mcp.search.weights import resolve_limit, resolve_weights

logger = logging.getLogger(__name__)

EMPTY_QUERY_ERROR = "query is empty"


def rank_entries(
    entries: Sequence[LogEntry],
    query: str,
    *,
    limit: float | None = None,
    include_recency_bonus: bool | None = None,
    synonyms: Sequence[str] | None = None,
    weights: WeightOverrides | None = None,
    settings: SearchSettings | None = None,
    now: datetime | None = None,
) -> SearchResponse:
    """Rank entries by relevance to ``query``.

    Per-call arguments layer over ``settings``: synonym rules and weight
    overrides merge, ``include_recency_bonus`` replaces the configured
    toggle when given. Without a ``limit`` the configured ceiling applies.

    Results with a zero score are dropped; ties are broken by the later
    timestamp first.
    """
    if settings is None:
        settings = SearchSettings()

    query_tokens = tokenize_query(query)
    if not query_tokens:
        return SearchResponse(query=query, error=EMPTY_QUERY_ERROR)

    if limit is None:
        safe_limit = resolve_limit(settings.max_results, settings.max_results)
    else:
        safe_limit = resolve_limit(limit)
    if include_recency_bonus is None:
        include_recency_bonus = settings.include_recency_bonus

    synonym_map = build_synonym_map([*settings.synonyms, *(synonyms or ())])
    expanded_tokens = expand_tokens(query_tokens, synonym_map)
    effective_weights = resolve_weights(settings.weights.overlay(weights))

    scored = [
        score_entry(entry, expanded_tokens, effective_weights, include_recency_bonus, now)
        for entry in entries
    ]
    matches = [result for result in scored if result.score > 0]
    matches.sort(key=lambda result: (result.score, result.entry.timestamp), reverse=True)
    ranked = matches[:safe_limit]

    logger.debug(
        "Query %r: %d of %d entries matched, returning %d",
        query,
        len(matches),
        len(entries),
        len(ranked),
    )

    return SearchResponse(
        query=query,
        query_tokens=query_tokens,
        expanded_tokens=expanded_tokens,
        total_matches=len(ranked),
        results=ranked,
    )


def search(text: str, query: str, **options) -> SearchResponse:
    """Parse raw memory log text and rank its entries against ``query``.

    Accepts the same keyword options as :func:`rank_entries`.
    """
    return rank_entries(parse_entries(text), query, **options)
