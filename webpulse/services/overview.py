"""Dashboard figures for one user, computed from already loaded records.

Nothing here touches the database: callers pass the user's projects and
tasks and get back status tallies, totals and the nearest due dates.
"""
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Any, TypeVar

from webpulse.models.status import MONTHS, Status, parse_due_date

T = TypeVar("T")

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
TODAY_LABEL = "TODAY"
NO_DUE_DATE_LABEL = "No upcoming due date"


def status_name(status: Any) -> str:
    if isinstance(status, Status):
        return status.value
    return str(status)


def tally_statuses(statuses: Iterable[Any]) -> dict[str, int]:
    """Count occurrences of each status, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for status in statuses:
        key = status_name(status)
        counts[key] = counts.get(key, 0) + 1
    return counts


def chart_slices(counts: dict[str, int]) -> list[dict[str, Any]]:
    return [
        {"id": f"status_{status}_{index}", "value": count, "label": status}
        for index, (status, count) in enumerate(counts.items())
    ]


def _as_date(value: date | str | None) -> date | None:
    if value is None or value == "":
        return None
    return parse_due_date(value)


def nearest_due(
    records: Sequence[T],
    due_of: Callable[[T], date | str | None],
    today: date,
) -> T | None:
    """Pick the record whose due date comes up next.

    A record due today wins outright (the first one found). Otherwise the
    earliest date strictly after ``today`` is chosen, first encountered on
    ties. Past-due and undated records are never selected.
    """
    closest: T | None = None
    closest_due: date | None = None
    for record in records:
        due = _as_date(due_of(record))
        if due is None:
            continue
        if due == today:
            return record
        if due > today and (closest_due is None or due < closest_due):
            closest, closest_due = record, due
    return closest


def date_string(value: date) -> str:
    """Format like JavaScript's ``Date.toDateString()``: ``"Mon Oct 26 2026"``."""
    return f"{WEEKDAYS[value.weekday()]} {MONTHS[value.month - 1]} {value.day:02d} {value.year}"


def describe_due(due: date | str | None, today: date) -> str:
    due = _as_date(due)
    if due is None:
        return NO_DUE_DATE_LABEL
    if due == today:
        return TODAY_LABEL
    return date_string(due)


@dataclass
class Overview:
    project_counts: dict[str, int] = field(default_factory=dict)
    task_counts: dict[str, int] = field(default_factory=dict)
    total_projects: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    incomplete_tasks: int = 0
    next_project: Any = None
    next_project_due: str = NO_DUE_DATE_LABEL
    next_task: Any = None
    next_task_due: str = NO_DUE_DATE_LABEL

    @property
    def project_chart(self) -> list[dict[str, Any]]:
        return chart_slices(self.project_counts)

    @property
    def task_chart(self) -> list[dict[str, Any]]:
        return chart_slices(self.task_counts)

    def as_dict(self, describe: Callable[[Any], Any] = lambda record: None) -> dict[str, Any]:
        return {
            "project_counts": self.project_counts,
            "task_counts": self.task_counts,
            "project_chart": self.project_chart,
            "task_chart": self.task_chart,
            "total_projects": self.total_projects,
            "total_tasks": self.total_tasks,
            "completed_tasks": self.completed_tasks,
            "incomplete_tasks": self.incomplete_tasks,
            "next_project": describe(self.next_project),
            "next_project_due": self.next_project_due,
            "next_task": describe(self.next_task),
            "next_task_due": self.next_task_due,
        }


def build_overview(
    projects: Sequence[Any],
    tasks: Sequence[Any],
    today: date | None = None,
    project_status: Callable[[Any], Any] = lambda p: p.project_status,
    task_status: Callable[[Any], Any] = lambda t: t.task_status,
    due_of: Callable[[Any], date | str | None] = lambda r: r.date_due,
) -> Overview:
    today = today or date.today()

    project_counts = tally_statuses(project_status(p) for p in projects)
    task_counts = tally_statuses(task_status(t) for t in tasks)
    completed = task_counts.get(Status.Completed.value, 0)

    next_project = nearest_due(projects, due_of, today)
    next_task = nearest_due(tasks, due_of, today)

    return Overview(
        project_counts=project_counts,
        task_counts=task_counts,
        total_projects=len(projects),
        total_tasks=len(tasks),
        completed_tasks=completed,
        incomplete_tasks=len(tasks) - completed,
        next_project=next_project,
        next_project_due=describe_due(due_of(next_project) if next_project else None, today),
        next_task=next_task,
        next_task_due=describe_due(due_of(next_task) if next_task else None, today),
    )
