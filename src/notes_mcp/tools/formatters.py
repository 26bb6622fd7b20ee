"""JSON output formatters for MCP tool responses."""

import json
from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel

from notes_mcp.models.search import SearchResponse

NOT_CONFIGURED_ERROR = "NOTES_DIRECTORY environment variable not set"


def dump_json(payload: Any) -> str:
    """Pretty JSON, non-ASCII kept as-is."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


def serialize_model(model: BaseModel) -> dict[str, Any]:
    """camelCase keys, unset optionals left out."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def format_models(models: Sequence[BaseModel]) -> str:
    """Format entries or reminders as a JSON array."""
    return dump_json([serialize_model(m) for m in models])


def format_error(message: str) -> str:
    return dump_json({"error": message})


def format_search_response(response: SearchResponse) -> str:
    """Format: {query, queryTokens, expandedTokens, totalMatches, results}."""
    if response.error is not None:
        return format_error(response.error)
    return dump_json(serialize_model(response))
