"""Query tokenization."""


def normalize(text: str) -> str:
    """Case-fold text for comparison."""
    return text.lower()


def tokenize_query(query: str) -> list[str]:
    """Split a query on whitespace into lowercase, non-empty tokens.

    An empty list means the query is empty; callers report that rather than
    searching.
    """
    return [normalize(token) for token in query.split()]
