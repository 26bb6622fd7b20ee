"""Weight resolution — bounds score weights and result limits."""

import math

from notes_mcp.models.search import SearchWeights, WeightOverrides

DEFAULT_WEIGHTS = SearchWeights()

# Signal weights must stay positive; bonuses may be switched off with 0.
WEIGHT_BOUNDS: dict[str, tuple[int, int]] = {
    "tag_exact": (1, 20),
    "date_match": (1, 20),
    "month_match": (1, 20),
    "tag_partial": (1, 20),
    "content_match": (1, 20),
    "multi_token_bonus": (0, 20),
    "all_tokens_bonus": (0, 20),
}

LIMIT_BOUNDS = (1, 200)
MAX_RESULTS_BOUNDS = (10, 200)
DEFAULT_MAX_RESULTS = 50


def to_bounded_int(value: float | None, fallback: int, minimum: int, maximum: int) -> int:
    """Floor ``value`` and clamp it into [minimum, maximum].

    Missing or non-finite values return ``fallback`` unchanged. Integers are
    clamped without a float conversion, so arbitrarily large ones work.
    """
    if value is None:
        return fallback
    if isinstance(value, int):
        return min(max(value, minimum), maximum)
    if not math.isfinite(value):
        return fallback
    return min(max(math.floor(value), minimum), maximum)


def resolve_weights(overrides: WeightOverrides | None = None) -> SearchWeights:
    """Overlay overrides on the defaults, clamping each field into range."""
    resolved: dict[str, int] = {}
    for name, (minimum, maximum) in WEIGHT_BOUNDS.items():
        default = getattr(DEFAULT_WEIGHTS, name)
        value = getattr(overrides, name) if overrides is not None else None
        resolved[name] = to_bounded_int(value, default, minimum, maximum)
    return SearchWeights(**resolved)


def resolve_limit(limit: float | None, default: int = 10) -> int:
    """Bound a per-call result limit."""
    return to_bounded_int(limit, default, *LIMIT_BOUNDS)


def resolve_max_results(value: float | None) -> int:
    """Bound the configured result-count ceiling."""
    return to_bounded_int(value, DEFAULT_MAX_RESULTS, *MAX_RESULTS_BOUNDS)
