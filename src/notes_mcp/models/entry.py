"""Memory log entry model."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LogEntry(BaseModel):
    """One dated, tagged block of the memory log.

    ``position`` is the 0-based line index of the entry header in the source
    text. It exists so callers can navigate back to the entry and plays no
    part in scoring.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    position: int = Field(default=0, exclude=True)
    timestamp: str
    tags: list[str] = Field(default_factory=list)
    body: str = ""
    reminder_date: str | None = None

    @property
    def month(self) -> str:
        """``YYYY-MM`` prefix of the timestamp."""
        return self.timestamp[:7]


class ReminderStatus(StrEnum):
    """Where a reminder date falls relative to today."""

    OVERDUE = "overdue"
    TODAY = "today"
    UPCOMING = "upcoming"


class Reminder(BaseModel):
    """Reminder view of an entry, with ``@YYYY-MM-DD`` stripped from its text."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    position: int = Field(default=0, exclude=True)
    timestamp: str
    reminder_date: str
    tags: list[str] = Field(default_factory=list)
    content: str
    status: ReminderStatus
