"""Memory log parser — splits the flat log text into dated, tagged entries."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from notes_mcp.models.entry import LogEntry

logger = logging.getLogger(__name__)

# ## YYYY-MM-DD[ HH:mm] #tag1 #tag2 @YYYY-MM-DD
HEADER_RE = re.compile(r"^## (\d{4}-\d{2}-\d{2}(?: \d{2}:\d{2})?)(.*)$")
TAG_RE = re.compile(r"#[\w-]+")
REMINDER_RE = re.compile(r"@(\d{4}-\d{2}-\d{2})")

_TITLE_PREFIX = "# "


@dataclass
class _OpenEntry:
    position: int
    timestamp: str
    tags: list[str]
    reminder_date: str | None
    lines: list[str] = field(default_factory=list)

    def close(self) -> LogEntry:
        reminder = self.reminder_date
        if reminder is None:
            for line in self.lines:
                match = REMINDER_RE.search(line)
                if match:
                    reminder = match.group(1)
                    break
        return LogEntry(
            position=self.position,
            timestamp=self.timestamp,
            tags=self.tags,
            body="\n".join(self.lines),
            reminder_date=reminder,
        )


def parse_entries(text: str) -> list[LogEntry]:
    """Parse memory log text into entries, in document order.

    Text before the first header is dropped. Lines that look like a broken
    header are kept as body text of the open entry.
    """
    entries: list[LogEntry] = []
    current: _OpenEntry | None = None

    # only "\n" ends a line; other Unicode line breaks stay in the body
    for index, raw_line in enumerate(text.split("\n")):
        line = raw_line.rstrip("\r")
        header = HEADER_RE.match(line)
        if header:
            if current is not None:
                entries.append(current.close())
            rest = header.group(2)
            reminder = REMINDER_RE.search(rest)
            current = _OpenEntry(
                position=index,
                timestamp=header.group(1),
                tags=TAG_RE.findall(rest),
                reminder_date=reminder.group(1) if reminder else None,
            )
        elif current is not None and line.strip() and not line.startswith(_TITLE_PREFIX):
            current.lines.append(line)

    if current is not None:
        entries.append(current.close())

    return entries


def read_entries(path: Path) -> list[LogEntry]:
    """Read and parse the memory file. A missing file yields no entries."""
    if not path.exists():
        logger.debug("Memory file %s not found, treating as empty", path)
        return []
    entries = parse_entries(path.read_text(encoding="utf-8"))
    logger.debug("Parsed %d entries from %s", len(entries), path)
    return entries
