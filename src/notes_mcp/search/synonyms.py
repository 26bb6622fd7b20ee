"""Synonym map construction and single-hop query expansion."""

import logging
from collections.abc import Iterable

from notes_mcp.search.tokenizer import normalize

logger = logging.getLogger(__name__)

# key -> equivalent terms; values behave as sets, insertion order kept for stable output
SynonymMap = dict[str, list[str]]

BUILTIN_SYNONYMS: dict[str, tuple[str, ...]] = {
    "経費": ("精算", "交通費", "出張費"),
    "会議": ("mtg", "ミーティング"),
    "タスク": ("todo", "課題"),
}


def _add_terms(synonym_map: SynonymMap, key: str, values: Iterable[str]) -> None:
    terms = synonym_map.setdefault(key, [])
    for value in values:
        if value and value not in terms:
            terms.append(value)


def parse_synonym_rule(row: str) -> tuple[str, list[str]] | None:
    """Parse a ``key:v1,v2`` rule. Returns None for malformed rows."""
    parts = [part.strip() for part in row.split(":")]
    if len(parts) < 2 or not parts[0] or not parts[1]:
        return None
    values = [normalize(value.strip()) for value in parts[1].split(",")]
    return normalize(parts[0]), [value for value in values if value]


def build_synonym_map(custom_rules: Iterable[str] | None = None) -> SynonymMap:
    """Build the synonym map from the built-in table plus custom rules.

    Custom rules merge into the built-in terms for the same key instead of
    replacing them. Malformed rows are skipped.
    """
    synonym_map: SynonymMap = {}
    for key, values in BUILTIN_SYNONYMS.items():
        _add_terms(synonym_map, normalize(key), (normalize(v) for v in values))

    for row in custom_rules or ():
        parsed = parse_synonym_rule(row)
        if parsed is None:
            logger.debug("Skipping malformed synonym rule: %r", row)
            continue
        key, values = parsed
        _add_terms(synonym_map, key, values)

    return synonym_map


def expand_tokens(tokens: list[str], synonym_map: SynonymMap) -> list[str]:
    """Return the tokens plus their registered synonyms, deduplicated.

    A leading ``#`` is ignored for lookup. Expansion is single-hop: the
    synonyms of a synonym are not added.
    """
    expanded = dict.fromkeys(tokens)
    for token in tokens:
        bare = token[1:] if token.startswith("#") else token
        for synonym in synonym_map.get(bare, ()):
            expanded.setdefault(synonym)
    return list(expanded)
