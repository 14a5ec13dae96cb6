"""Functional core - task state, history and temporal queries with no I/O."""

from .errors import TaskError, ValidationError, NotFoundError
from .tasks import Task, Bucket, classify, filter_tasks, format_task_line, parse_deadline
from .history import Completed, Rescheduled, HistoryEvent, EventLog
from .week import WeekWindow, week_window, count_by_day
from .report import Report, build_report, format_report_sections
from .store import AppState, TaskStore

__all__ = [
    # Errors
    "TaskError",
    "ValidationError",
    "NotFoundError",
    # Tasks
    "Task",
    "Bucket",
    "classify",
    "filter_tasks",
    "format_task_line",
    "parse_deadline",
    # History
    "Completed",
    "Rescheduled",
    "HistoryEvent",
    "EventLog",
    # Week
    "WeekWindow",
    "week_window",
    "count_by_day",
    # Report
    "Report",
    "build_report",
    "format_report_sections",
    # Store
    "AppState",
    "TaskStore",
]
