"""Pure task domain logic - no I/O dependencies."""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum
from uuid import uuid4

from .errors import ValidationError


def calendar_day(now: date | datetime) -> date:
    """Resolve an instant to its calendar day (time of day dropped)."""
    if isinstance(now, datetime):
        return now.date()
    return now


def parse_deadline(value: date | str | None) -> date:
    """
    Parse a deadline into a date.

    Accepts a date or a YYYY-MM-DD string. Raises ValidationError when the
    value is missing or cannot be parsed.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError("Deadline is required")
    if not isinstance(value, str):
        raise ValidationError(f"Invalid deadline {value!r}, expected YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError(f"Invalid deadline {value!r}, expected YYYY-MM-DD")


def parse_title(value: str | None) -> str:
    """Trim a title, raising ValidationError if nothing is left."""
    title = value.strip() if isinstance(value, str) else ""
    if not title:
        raise ValidationError("Title is required")
    return title


def new_task_id() -> str:
    return uuid4().hex


@dataclass
class Task:
    """A dated task."""

    id: str
    title: str
    deadline: date
    description: str = ""
    completed: bool = False
    created_at: datetime = field(default_factory=datetime.now)

    def is_today(self, as_of: date | datetime | None = None) -> bool:
        return self.deadline == calendar_day(as_of or date.today())

    def is_tomorrow(self, as_of: date | datetime | None = None) -> bool:
        return self.deadline == calendar_day(as_of or date.today()) + timedelta(days=1)

    def is_day_after_tomorrow(self, as_of: date | datetime | None = None) -> bool:
        return self.deadline == calendar_day(as_of or date.today()) + timedelta(days=2)

    def is_pending(self, as_of: date | datetime | None = None) -> bool:
        """Still open and due today or earlier."""
        return not self.completed and self.deadline <= calendar_day(as_of or date.today())

    def is_overdue(self, as_of: date | datetime | None = None) -> bool:
        """Still open and due strictly before today."""
        return not self.completed and self.deadline < calendar_day(as_of or date.today())

    def is_upcoming(self, as_of: date | datetime | None = None) -> bool:
        """Due after today. Completed tasks count too."""
        return self.deadline > calendar_day(as_of or date.today())

    def days_until_due(self, as_of: date | datetime | None = None) -> int:
        """Days until the deadline (negative if past)."""
        return (self.deadline - calendar_day(as_of or date.today())).days


class Bucket(Enum):
    """Named task filters."""

    ALL = "all"
    TODAY = "today"
    TOMORROW = "tomorrow"
    DAY_AFTER_TOMORROW = "dayaftertomorrow"
    PENDING = "pending"
    OVERDUE = "overdue"
    UPCOMING = "upcoming"

    @property
    def label(self) -> str:
        labels = {
            Bucket.ALL: "All",
            Bucket.TODAY: "Today",
            Bucket.TOMORROW: "Tomorrow",
            Bucket.DAY_AFTER_TOMORROW: "Day After Tomorrow",
            Bucket.PENDING: "Pending",
            Bucket.OVERDUE: "Overdue",
            Bucket.UPCOMING: "Upcoming",
        }
        return labels[self]


def in_bucket(task: Task, bucket: Bucket, as_of: date | datetime) -> bool:
    """
    Check whether a task belongs to a named bucket.

    Pure function - no I/O.
    """
    match bucket:
        case Bucket.ALL:
            return True
        case Bucket.TODAY:
            return task.is_today(as_of)
        case Bucket.TOMORROW:
            return task.is_tomorrow(as_of)
        case Bucket.DAY_AFTER_TOMORROW:
            return task.is_day_after_tomorrow(as_of)
        case Bucket.PENDING:
            return task.is_pending(as_of)
        case Bucket.OVERDUE:
            return task.is_overdue(as_of)
        case Bucket.UPCOMING:
            return task.is_upcoming(as_of)
    raise ValueError(f"Unknown bucket: {bucket!r}")


def classify(task: Task, as_of: date | datetime) -> set[Bucket]:
    """All buckets a task belongs to as of a given day."""
    return {b for b in Bucket if in_bucket(task, b, as_of)}


def filter_tasks(
    tasks: list[Task],
    bucket: Bucket = Bucket.ALL,
    as_of: date | datetime | None = None,
) -> list[Task]:
    """
    Filter tasks to a named bucket, keeping their order.

    Pure function - no I/O.
    """
    as_of = as_of or datetime.now()
    return [t for t in tasks if in_bucket(t, bucket, as_of)]


def filter_pending(tasks: list[Task], as_of: date | datetime | None = None) -> list[Task]:
    """Filter to open tasks due today or earlier."""
    return filter_tasks(tasks, Bucket.PENDING, as_of)


def filter_overdue(tasks: list[Task], as_of: date | datetime | None = None) -> list[Task]:
    """Filter to open tasks due before today."""
    return filter_tasks(tasks, Bucket.OVERDUE, as_of)


def tasks_due_on(tasks: list[Task], day: date) -> list[Task]:
    """Tasks whose deadline is exactly the given day, completed or not."""
    return [t for t in tasks if t.deadline == day]


def parse_bulk_line(line: str) -> tuple[str, str, str]:
    """
    Split one bulk-input line into (title, description, deadline).

    Fields are comma separated and trimmed; missing trailing fields are
    empty and anything past the third comma-separated field is ignored.
    """
    parts = [f.strip() for f in line.split(",")]
    parts += [""] * (3 - len(parts))
    return parts[0], parts[1], parts[2]


def format_task_line(task: Task, as_of: date | None = None, date_format: str = "%d/%m/%Y") -> str:
    """
    Format a single task for display in a listing.

    Pure function - no I/O.
    """
    as_of = as_of or date.today()
    days = task.days_until_due(as_of)

    mark = "x" if task.completed else " "
    if task.completed:
        urgency = "done"
    elif days < 0:
        urgency = f"OVERDUE by {-days}d"
    elif days == 0:
        urgency = "due TODAY"
    else:
        urgency = f"due in {days}d"

    line = f"[{mark}] {task.id[:8]}  {task.title} ({task.deadline.strftime(date_format)}, {urgency})"
    if task.description:
        line += f"\n      {task.description}"
    return line
