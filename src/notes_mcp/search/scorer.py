"""Multi-signal relevance scoring of a single log entry."""

from datetime import datetime

from notes_mcp.models.entry import LogEntry
from notes_mcp.models.search import ScoredResult, SearchWeights
from notes_mcp.search.recency import recency_bonus
from notes_mcp.search.tokenizer import normalize

MULTI_TOKEN_REASON = "bonus:multi-token"
ALL_TOKENS_REASON = "bonus:all-tokens"


def score_entry(
    entry: LogEntry,
    tokens: list[str],
    weights: SearchWeights,
    include_recency_bonus: bool = True,
    now: datetime | None = None,
) -> ScoredResult:
    """Score one entry against the (already expanded) query tokens.

    An exact tag hit short-circuits the remaining checks for that token.
    Otherwise date, month, partial-tag and content substring checks all
    apply independently and their weights add up.

    The all-tokens bonus compares the matched count against ``len(tokens)``,
    so with synonym expansion every expanded token has to match. The recency
    bonus only applies to entries that matched at least one token.
    """
    date_text = normalize(entry.timestamp)
    month_text = entry.month
    tags = [normalize(tag) for tag in entry.tags]
    tag_text = " ".join(tags)
    content_text = normalize(entry.body)

    score = 0
    matched_token_count = 0
    reasons: list[str] = []

    for token in tokens:
        tag_token = token if token.startswith("#") else f"#{token}"
        if tag_token in tags:
            score += weights.tag_exact
            reasons.append(f"tag:{tag_token}")
            matched_token_count += 1
            continue

        matched = False
        if token in date_text:
            score += weights.date_match
            reasons.append(f"date:{token}")
            matched = True
        if token in month_text:
            score += weights.month_match
            reasons.append(f"month:{token}")
            matched = True
        if token in tag_text:
            score += weights.tag_partial
            reasons.append(f"tag-partial:{token}")
            matched = True
        if token in content_text:
            score += weights.content_match
            reasons.append(f"content:{token}")
            matched = True

        if matched:
            matched_token_count += 1

    if matched_token_count >= 2:
        score += weights.multi_token_bonus
        reasons.append(MULTI_TOKEN_REASON)

    if tokens and matched_token_count == len(tokens):
        score += weights.all_tokens_bonus
        reasons.append(ALL_TOKENS_REASON)

    if include_recency_bonus and matched_token_count > 0:
        bonus = recency_bonus(entry.timestamp, now)
        if bonus > 0:
            score += bonus
            reasons.append(f"bonus:recent+{bonus}")

    return ScoredResult(
        score=score,
        matched_token_count=matched_token_count,
        reasons=list(dict.fromkeys(reasons)),
        entry=entry,
    )
