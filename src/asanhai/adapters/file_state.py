"""File-based state storage adapter."""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

from asanhai.core.errors import ValidationError
from asanhai.core.history import Completed, EventLog, HistoryEvent, Rescheduled, event_kind
from asanhai.core.store import AppState
from asanhai.core.tasks import Task, parse_deadline, parse_title

logger = logging.getLogger(__name__)

TASKS_FILENAME = "tasks.json"
HISTORY_FILENAME = "history.json"

MALFORMED_RECORD_ERRORS = (KeyError, TypeError, ValueError, AttributeError, ValidationError)


class StorageError(Exception):
    """Raised when a state file cannot be read or parsed."""

    pass


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "deadline": task.deadline.isoformat(),
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
    }


def task_from_dict(data: dict[str, Any]) -> Task:
    """
    Create Task from a stored record.

    Records written by the browser version of the app use 'desc' and
    'created' and numeric ids; those are accepted too.
    """
    created = data.get("createdAt") or data.get("created")
    return Task(
        id=str(data["id"]),
        title=parse_title(data["title"]),
        description=data.get("description", data.get("desc", "")) or "",
        deadline=parse_deadline(data["deadline"]),
        completed=bool(data.get("completed", False)),
        created_at=_parse_instant(created) if created else datetime.now(),
    )


def event_to_dict(event: HistoryEvent) -> dict[str, Any]:
    match event:
        case Completed():
            return {
                "type": event_kind(event),
                "title": event.title,
                "occurredAt": event.occurred_at.isoformat(),
            }
        case Rescheduled():
            return {
                "type": event_kind(event),
                "title": event.title,
                "fromDeadline": event.from_deadline.isoformat(),
                "toDeadline": event.to_deadline.isoformat(),
                "occurredAt": event.occurred_at.isoformat(),
            }
    raise TypeError(f"Unknown history event: {event!r}")


def event_from_dict(data: dict[str, Any]) -> HistoryEvent:
    """Create a history event from a stored record (current or legacy keys)."""
    occurred_at = _parse_instant(data.get("occurredAt") or data["date"])
    match data["type"]:
        case "completed":
            return Completed(title=data["title"], occurred_at=occurred_at)
        case "rescheduled" | "date_change":
            return Rescheduled(
                title=data["title"],
                from_deadline=date.fromisoformat(data.get("fromDeadline") or data["from"]),
                to_deadline=date.fromisoformat(data.get("toDeadline") or data["to"]),
                occurred_at=occurred_at,
            )
        case other:
            raise ValueError(f"Unknown event type: {other!r}")


def _parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 timestamp into local time."""
    # JavaScript's toISOString() uses a trailing Z
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class FileStateStore:
    """
    File-based state storage.

    Implements StateStore protocol. Tasks and history live in two JSON
    files inside the data directory.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / TASKS_FILENAME

    @property
    def history_path(self) -> Path:
        return self.data_dir / HISTORY_FILENAME

    def _read_records(self, path: Path) -> list[dict[str, Any]]:
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError) as e:
            raise StorageError(f"Failed to read {path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Expected a JSON array in {path}")
        return data

    def load(self) -> AppState:
        """Load saved state. Missing files load as empty."""
        tasks = []
        for record in self._read_records(self.tasks_path):
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-object task record {record!r}")
                continue
            try:
                tasks.append(task_from_dict(record))
            except MALFORMED_RECORD_ERRORS as e:
                logger.warning(f"Skipping malformed task record {record!r}: {e}")

        events = []
        for record in self._read_records(self.history_path):
            if not isinstance(record, dict):
                logger.warning(f"Skipping non-object history record {record!r}")
                continue
            try:
                events.append(event_from_dict(record))
            except MALFORMED_RECORD_ERRORS as e:
                logger.warning(f"Skipping malformed history record {record!r}: {e}")

        logger.debug(f"Loaded {len(tasks)} task(s) and {len(events)} event(s) from {self.data_dir}")
        return AppState(tasks=tasks, events=EventLog(events))

    def save(self, state: AppState) -> None:
        """Write both snapshots to disk."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.tasks_path.write_text(
            json.dumps([task_to_dict(t) for t in state.tasks], indent=2)
        )
        self.history_path.write_text(
            json.dumps([event_to_dict(e) for e in state.events.all()], indent=2)
        )
