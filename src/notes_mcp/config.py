"""Environment-variable-based configuration."""

import logging
import os
import re
from pathlib import Path

from notes_mcp.memory.writer import InsertPosition
from notes_mcp.models.search import SearchSettings, WeightOverrides
from notes_mcp.search.weights import WEIGHT_BOUNDS, resolve_max_results

logger = logging.getLogger(__name__)

MEMORY_FILE_NAME = "memory.md"

_FALSE_VALUES = {"0", "false", "no", "off"}
_RULE_SEPARATOR_RE = re.compile(r"[;\n]")


def get_notes_dir() -> Path | None:
    """Return the notes directory from NOTES_DIRECTORY, or None when unset."""
    raw = os.environ.get("NOTES_DIRECTORY", "").strip()
    if not raw:
        return None
    return Path(raw).expanduser()


def get_memory_path() -> Path | None:
    """Return the memory log path inside the notes directory."""
    notes_dir = get_notes_dir()
    if notes_dir is None:
        return None
    return notes_dir / MEMORY_FILE_NAME


def get_log_level() -> str:
    """Return the logging level from NOTES_LOG_LEVEL."""
    return os.environ.get("NOTES_LOG_LEVEL", "WARNING").upper()


def _get_number(name: str) -> float | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, raw)
        return None


def get_max_results() -> int:
    """Return the result-count ceiling from NOTES_MAX_RESULTS, clamped to [10, 200]."""
    return resolve_max_results(_get_number("NOTES_MAX_RESULTS"))


def is_recency_bonus_enabled() -> bool:
    """Return False if NOTES_RECENCY_BONUS is set to a false-like value."""
    return os.environ.get("NOTES_RECENCY_BONUS", "true").strip().lower() not in _FALSE_VALUES


def get_custom_synonyms() -> list[str]:
    """Return synonym rules from NOTES_SYNONYMS (``key:a,b`` rows split on ``;`` or newlines)."""
    raw = os.environ.get("NOTES_SYNONYMS", "")
    return [row.strip() for row in _RULE_SEPARATOR_RE.split(raw) if row.strip()]


def get_weight_overrides() -> WeightOverrides:
    """Return weight overrides from NOTES_WEIGHT_<FIELD> variables."""
    values = {name: _get_number(f"NOTES_WEIGHT_{name.upper()}") for name in WEIGHT_BOUNDS}
    return WeightOverrides(**values)


def get_insert_position() -> InsertPosition:
    """Return the append position from NOTES_INSERT_POSITION (top or bottom)."""
    raw = os.environ.get("NOTES_INSERT_POSITION", "top").strip().lower()
    try:
        return InsertPosition(raw)
    except ValueError:
        logger.warning("Unknown NOTES_INSERT_POSITION=%r, using top", raw)
        return InsertPosition.TOP


def load_search_settings() -> SearchSettings:
    """Collect the search configuration into one explicit settings object."""
    return SearchSettings(
        max_results=get_max_results(),
        include_recency_bonus=is_recency_bonus_enabled(),
        synonyms=get_custom_synonyms(),
        weights=get_weight_overrides(),
    )
