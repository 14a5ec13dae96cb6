"""Pure weekly report assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime

from .history import Completed, HistoryEvent, Rescheduled
from .tasks import Task, filter_overdue, filter_pending
from .week import WeekWindow, week_window


@dataclass
class Report:
    """Weekly activity report, derived on demand."""

    week: WeekWindow
    completed_this_week: list[Completed]
    reschedules_this_week: list[Rescheduled]
    pending_titles: list[str]
    overdue_titles: list[str]


def build_report(
    events: list[HistoryEvent],
    tasks: list[Task],
    now: date | datetime | None = None,
) -> Report:
    """
    Build the report for the week containing now.

    Pure function - no I/O. Event lists are week-scoped and keep log order;
    pending and overdue are evaluated as of now regardless of week.
    """
    now = now or datetime.now()
    week = week_window(now)

    completed: list[Completed] = []
    rescheduled: list[Rescheduled] = []
    for event in events:
        if not week.contains(event.occurred_at):
            continue
        match event:
            case Completed():
                completed.append(event)
            case Rescheduled():
                rescheduled.append(event)
            case _:
                raise TypeError(f"Unknown history event: {event!r}")

    return Report(
        week=week,
        completed_this_week=completed,
        reschedules_this_week=rescheduled,
        pending_titles=[t.title for t in filter_pending(tasks, now)],
        overdue_titles=[t.title for t in filter_overdue(tasks, now)],
    )


def format_report_sections(
    report: Report,
    date_format: str = "%d/%m/%Y",
    timestamp_format: str = "%d/%m/%Y %H:%M",
) -> dict[str, str]:
    """
    Format a report into text sections.

    Pure function - no I/O.
    Returns dict with keys: completed, reschedules, pending, overdue
    """
    completed_md = "\n".join(
        f"- {e.title} on {e.occurred_at.strftime(timestamp_format)}"
        for e in report.completed_this_week
    ) or "None"

    reschedules_md = "\n".join(
        f"- {e.title} changed from {e.from_deadline.strftime(date_format)}"
        f" to {e.to_deadline.strftime(date_format)}"
        f" ({e.occurred_at.strftime(timestamp_format)})"
        for e in report.reschedules_this_week
    ) or "None"

    return {
        "completed": completed_md,
        "reschedules": reschedules_md,
        "pending": ", ".join(report.pending_titles) or "None",
        "overdue": ", ".join(report.overdue_titles) or "None",
    }
