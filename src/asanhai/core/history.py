"""
Task history events and the append-only event log.

Events are immutable records of a completion toggle or a deadline change.
They snapshot the task title rather than the id, so history outlives the
task it describes.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterator


@dataclass(frozen=True)
class Completed:
    """A task's completion was toggled (either direction)."""

    title: str
    occurred_at: datetime


@dataclass(frozen=True)
class Rescheduled:
    """A task's deadline was moved."""

    title: str
    from_deadline: date
    to_deadline: date
    occurred_at: datetime


HistoryEvent = Completed | Rescheduled


class EventLog:
    """
    Append-only, insertion-ordered sequence of history events.

    There is no way to edit or remove an event once appended.
    """

    def __init__(self, events: list[HistoryEvent] | None = None):
        self._events: list[HistoryEvent] = list(events or [])

    def append(self, event: HistoryEvent) -> None:
        self._events.append(event)

    def all(self) -> list[HistoryEvent]:
        """Snapshot of every event in insertion order."""
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[HistoryEvent]:
        return iter(list(self._events))


def event_kind(event: HistoryEvent) -> str:
    """Stable name of an event's variant."""
    match event:
        case Completed():
            return "completed"
        case Rescheduled():
            return "rescheduled"
    raise TypeError(f"Unknown history event: {event!r}")
