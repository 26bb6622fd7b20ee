"""Recency bonus by entry age."""

from datetime import datetime

# (max age in days, bonus), checked in order
RECENCY_TIERS: tuple[tuple[int, int], ...] = (
    (7, 4),
    (30, 3),
    (90, 2),
    (180, 1),
)


def parse_timestamp(timestamp: str) -> datetime | None:
    """Parse ``YYYY-MM-DD`` or ``YYYY-MM-DD HH:mm`` as local wall-clock time."""
    for fmt in ("%Y-%m-%d %H:%M", "%Y-%m-%d"):
        try:
            return datetime.strptime(timestamp, fmt)
        except ValueError:
            continue
    return None


def recency_bonus(timestamp: str, now: datetime | None = None) -> int:
    """Return the bonus for an entry written at ``timestamp``.

    Unparseable timestamps get no bonus. Entries dated in the future count
    as brand new.
    """
    written = parse_timestamp(timestamp)
    if written is None:
        return 0
    if now is None:
        now = datetime.now()

    age_days = (now - written).total_seconds() / 86400.0
    for max_age, bonus in RECENCY_TIERS:
        if age_days <= max_age:
            return bonus
    return 0
