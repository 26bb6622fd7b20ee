"""Append path — inserts new header blocks into the memory file."""

import logging
import re
from datetime import date, datetime
from enum import StrEnum
from pathlib import Path

from notes_mcp.memory.parser import TAG_RE, parse_entries
from notes_mcp.memory.queries import as_tag
from notes_mcp.models.entry import LogEntry

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "# Memory Log"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class InsertPosition(StrEnum):
    """Where new entries go: right after the document title, or at the end."""

    TOP = "top"
    BOTTOM = "bottom"


def format_header(timestamp: str, tags: list[str], reminder_date: str | None = None) -> str:
    """Format: ## 2026-02-01 14:30 #todo #work @2026-02-10."""
    parts = [f"## {timestamp}", *tags]
    if reminder_date:
        parts.append(f"@{reminder_date}")
    return " ".join(parts)


def insert_block(text: str, block: str, position: InsertPosition) -> str:
    """Return ``text`` with ``block`` inserted according to ``position``."""
    block = block.rstrip("\n") + "\n"
    if position is InsertPosition.BOTTOM:
        head = text.rstrip("\n")
        return f"{head}\n\n{block}" if head else block

    lines = text.split("\n")
    title_index = next((i for i, line in enumerate(lines) if line.strip()), None)
    if title_index is None:
        return block
    if not lines[title_index].startswith("# "):
        existing = text.lstrip("\n")
        return f"{block}\n{existing}"

    title = "\n".join(lines[: title_index + 1])
    rest = "\n".join(lines[title_index + 1 :]).strip("\n")
    if rest:
        return f"{title}\n\n{block}\n{rest}\n"
    return f"{title}\n\n{block}"


def _validate_tags(tags: list[str] | None) -> list[str]:
    normalized: list[str] = []
    for tag in tags or []:
        candidate = as_tag(tag.strip())
        if not TAG_RE.fullmatch(candidate):
            raise ValueError(f"Invalid tag: {tag!r}")
        normalized.append(candidate)
    return normalized


def _validate_reminder(reminder_date: str | None) -> str | None:
    if reminder_date is None or not reminder_date.strip():
        return None
    value = reminder_date.strip().lstrip("@")
    if not _DATE_RE.fullmatch(value):
        raise ValueError(f"Reminder date must be YYYY-MM-DD, got {reminder_date!r}")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError(f"Invalid reminder date: {reminder_date!r}") from e
    return value


def append_entry(
    path: Path,
    content: str,
    tags: list[str] | None = None,
    reminder_date: str | None = None,
    position: InsertPosition = InsertPosition.TOP,
    now: datetime | None = None,
) -> LogEntry:
    """Write a new entry to the memory file and return it.

    A missing file is created with the document title. Raises ValueError for
    blank content, malformed tags or a malformed reminder date.
    """
    body = content.strip()
    if not body:
        raise ValueError("content is required")
    clean_tags = _validate_tags(tags)
    reminder = _validate_reminder(reminder_date)
    if now is None:
        now = datetime.now()

    timestamp = now.strftime(TIMESTAMP_FORMAT)
    header = format_header(timestamp, clean_tags, reminder)
    block = f"{header}\n{body}\n"

    if path.exists():
        text = path.read_text(encoding="utf-8")
    else:
        logger.info("Creating memory file at %s", path)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = f"{DOCUMENT_TITLE}\n"

    updated = insert_block(text, block, position)
    path.write_text(updated, encoding="utf-8")

    lines = updated.split("\n")
    if position is InsertPosition.TOP:
        line_index = lines.index(header)
    else:
        line_index = len(lines) - 1 - lines[::-1].index(header)
    logger.debug("Inserted entry %s at line %d (%s)", timestamp, line_index, position.value)

    # read back the way the log will be parsed: body reminders, skipped "# " lines
    entry = parse_entries(block)[0]
    return entry.model_copy(update={"position": line_index})
