"""Read-only entry queries: filters, recent entries, tags, reminders, month structure."""

import re
from collections.abc import Sequence
from datetime import date, timedelta

from notes_mcp.models.entry import LogEntry, Reminder, ReminderStatus

_REMINDER_STRIP_RE = re.compile(r"@\d{4}-\d{2}-\d{2}\s*")
_RANGE_SEPARATOR = " to "


def as_tag(tag: str) -> str:
    """Return ``tag`` with a leading ``#``."""
    return tag if tag.startswith("#") else f"#{tag}"


def filter_entries(
    entries: Sequence[LogEntry],
    query: str | None = None,
    tag: str | None = None,
    date_input: str | None = None,
) -> list[LogEntry]:
    """Exact filtering by tag, date and keyword.

    The tag is compared case-sensitively. ``date_input`` is anything
    :func:`filter_by_date` accepts. The keyword is a case-insensitive
    substring of the body or of any tag.
    """
    filtered = list(entries)
    if tag:
        wanted = as_tag(tag)
        filtered = [e for e in filtered if wanted in e.tags]
    if date_input:
        filtered = filter_by_date(filtered, date_input)
    if query:
        needle = query.lower()
        filtered = [
            e
            for e in filtered
            if needle in e.body.lower() or any(needle in t.lower() for t in e.tags)
        ]
    return filtered


def filter_by_date(entries: Sequence[LogEntry], date_input: str) -> list[LogEntry]:
    """Filter by ``YYYY-MM-DD`` prefix or an inclusive ``start to end`` range."""
    parts = date_input.split(_RANGE_SEPARATOR)
    if len(parts) == 2:
        start, end = (part.strip() for part in parts)
        upper = f"{end} 23:59"
        return [e for e in entries if start <= e.timestamp <= upper]
    return [e for e in entries if e.timestamp.startswith(date_input.strip())]


def recent_entries(entries: Sequence[LogEntry], limit: int = 5) -> list[LogEntry]:
    """Most recent entries first, whatever order they appear in the file."""
    ordered = sorted(entries, key=lambda e: e.timestamp, reverse=True)
    return ordered[: max(limit, 0)]


def entries_with_tag(entries: Sequence[LogEntry], tag: str) -> list[LogEntry]:
    wanted = as_tag(tag)
    return [e for e in entries if wanted in e.tags]


def list_tags(entries: Sequence[LogEntry]) -> list[str]:
    """Distinct tags, case-sensitive, sorted."""
    return sorted({tag for entry in entries for tag in entry.tags})


def list_months(entries: Sequence[LogEntry]) -> list[str]:
    """Distinct ``YYYY-MM`` months in document order."""
    return list(dict.fromkeys(entry.month for entry in entries))


def month_tags(entries: Sequence[LogEntry], month: str) -> list[str]:
    return list_tags([e for e in entries if e.timestamp.startswith(month)])


def month_tag_entries(entries: Sequence[LogEntry], month: str, tag: str) -> list[LogEntry]:
    """Entries in ``month`` carrying ``tag``, newest first."""
    wanted = as_tag(tag)
    matching = [e for e in entries if e.timestamp.startswith(month) and wanted in e.tags]
    return sorted(matching, key=lambda e: e.timestamp, reverse=True)


def strip_reminder_dates(text: str) -> str:
    return _REMINDER_STRIP_RE.sub("", text).strip()


def reminder_status(reminder_date: str, today: date) -> ReminderStatus:
    today_text = today.isoformat()
    if reminder_date < today_text:
        return ReminderStatus.OVERDUE
    if reminder_date == today_text:
        return ReminderStatus.TODAY
    return ReminderStatus.UPCOMING


def to_reminder(entry: LogEntry, today: date) -> Reminder | None:
    """Reminder view of ``entry``, or None if it carries no reminder date."""
    if entry.reminder_date is None:
        return None
    return Reminder(
        position=entry.position,
        timestamp=entry.timestamp,
        reminder_date=entry.reminder_date,
        tags=entry.tags,
        content=strip_reminder_dates(entry.body),
        status=reminder_status(entry.reminder_date, today),
    )


def reminders_due(
    entries: Sequence[LogEntry],
    days_ahead: int = 7,
    today: date | None = None,
    include_overdue: bool = False,
) -> list[Reminder]:
    """Reminders due between today and ``days_ahead`` days from now, inclusive.

    Sorted by reminder date. Overdue reminders are only included on request.
    """
    if today is None:
        today = date.today()
    # keep the window end inside the representable date range
    span = max(min(days_ahead, (date.max - today).days), (date.min - today).days)
    start = today.isoformat()
    end = (today + timedelta(days=span)).isoformat()

    reminders: list[Reminder] = []
    for entry in entries:
        reminder = to_reminder(entry, today)
        if reminder is None or reminder.reminder_date > end:
            continue
        if reminder.reminder_date < start and not include_overdue:
            continue
        reminders.append(reminder)
    return sorted(reminders, key=lambda r: r.reminder_date)
