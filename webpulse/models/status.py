import enum
from datetime import date, datetime, timezone

from sqlalchemy import Column, Enum


class Status(str, enum.Enum):
    """Lifecycle shared by projects and tasks. Values are the wire names."""

    Created = "Created"
    Pending = "Pending"
    InProgress = "InProgress"
    Completed = "Completed"


MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
          "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_due_date(value: date | None) -> str | None:
    """Render a due date as ``"Mon D YYYY"`` (e.g. ``"Oct 19 2026"``)."""
    if value is None:
        return None
    return f"{MONTHS[value.month - 1]} {value.day} {value.year}"


def parse_due_date(value: str | date) -> date:
    """Parse ``"Mon D YYYY"`` or ISO ``YYYY-MM-DD`` into a calendar date."""
    if isinstance(value, date):
        return value
    text = value.strip()
    parts = text.split()
    if len(parts) == 3 and parts[0][:3].title() in MONTHS:
        month = MONTHS.index(parts[0][:3].title()) + 1
        return date(int(parts[2]), month, int(parts[1].rstrip(",")))
    return date.fromisoformat(text)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def status_column():
    return Column(
        Enum(Status, name="status", values_callable=lambda e: [m.value for m in e]),
        default=Status.Created,
        nullable=False,
    )
