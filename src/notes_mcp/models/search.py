"""Search-related models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from notes_mcp.models.entry import LogEntry

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SearchWeights(BaseModel):
    """Resolved score weights. Every field is a bounded integer."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    tag_exact: int = 6
    date_match: int = 4
    month_match: int = 3
    tag_partial: int = 3
    content_match: int = 2
    multi_token_bonus: int = 3
    all_tokens_bonus: int = 4


class WeightOverrides(BaseModel):
    """Partial weight overrides supplied by configuration or a caller.

    Values that cannot be read as a number are dropped here so the resolver
    falls back to the default for that field.
    """

    model_config = _CAMEL

    tag_exact: int | float | None = None
    date_match: int | float | None = None
    month_match: int | float | None = None
    tag_partial: int | float | None = None
    content_match: int | float | None = None
    multi_token_bonus: int | float | None = None
    all_tokens_bonus: int | float | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> int | float | None:
        if value is None or isinstance(value, bool):
            return None
        # ints of any size stay exact so the resolver can clamp them
        if isinstance(value, int):
            return value
        try:
            return float(value)
        except (TypeError, ValueError, OverflowError):
            return None

    def overlay(self, other: "WeightOverrides | None") -> "WeightOverrides":
        """Return a copy with ``other``'s supplied fields taking precedence."""
        if other is None:
            return self
        merged = {**self.model_dump(exclude_none=True), **other.model_dump(exclude_none=True)}
        return WeightOverrides.model_validate(merged)


class ScoredResult(BaseModel):
    """Score, match reasons and matched-token count for one entry."""

    model_config = _CAMEL

    score: int
    matched_token_count: int
    reasons: list[str] = Field(default_factory=list)
    entry: LogEntry


class SearchResponse(BaseModel):
    """Ranked results plus the tokens used to produce them.

    ``error`` is set instead of raising when the query cannot be searched,
    so callers can tell "no query" apart from "nothing matched".
    """

    model_config = _CAMEL

    query: str
    query_tokens: list[str] = Field(default_factory=list)
    expanded_tokens: list[str] = Field(default_factory=list)
    total_matches: int = 0
    results: list[ScoredResult] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SearchSettings(BaseModel):
    """Search configuration passed explicitly into the ranker."""

    max_results: int = 50
    include_recency_bonus: bool = True
    synonyms: list[str] = Field(default_factory=list)
    weights: WeightOverrides = Field(default_factory=WeightOverrides)
