"""Pure week navigation logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from .tasks import Task, calendar_day, tasks_due_on


@dataclass(frozen=True)
class WeekWindow:
    """A Monday-to-Sunday run of seven days."""

    start_date: date
    days: tuple[date, ...]

    @property
    def end_date(self) -> date:
        return self.days[-1]

    def contains(self, day: date | datetime) -> bool:
        return self.start_date <= calendar_day(day) <= self.end_date

    def label(self) -> str:
        """Human-readable range, e.g. 'Aug 11 – Aug 17, 2025'."""
        return f"{self.start_date.strftime('%b %d')} – {self.end_date.strftime('%b %d, %Y')}"


def start_of_week(now: date | datetime) -> date:
    """Monday of the week containing now."""
    day = calendar_day(now)
    return day - timedelta(days=day.weekday())


def week_window(now: date | datetime, offset_weeks: int = 0) -> WeekWindow:
    """
    Week window shifted offset_weeks from the week containing now.

    Pure function - no I/O. Negative offsets go back in time.
    """
    start = start_of_week(now) + timedelta(days=offset_weeks * 7)
    return WeekWindow(
        start_date=start,
        days=tuple(start + timedelta(days=i) for i in range(7)),
    )


def count_by_day(window: WeekWindow, tasks: list[Task]) -> list[tuple[date, int]]:
    """Number of tasks due on each day of the window, in day order."""
    return [(day, len(tasks_due_on(tasks, day))) for day in window.days]


def format_day_count(count: int) -> str:
    """Calendar cell text for a day's task count."""
    if count == 0:
        return "No tasks"
    return f"{count} task{'s' if count > 1 else ''}"
