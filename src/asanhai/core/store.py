"""In-memory task store - owns the task list and the history log."""

import logging
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Callable

from .errors import NotFoundError, ValidationError
from .history import Completed, EventLog, Rescheduled
from .tasks import Task, new_task_id, parse_bulk_line, parse_deadline, parse_title

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Everything that gets persisted: tasks and their history."""

    tasks: list[Task] = field(default_factory=list)
    events: EventLog = field(default_factory=EventLog)


Listener = Callable[[AppState], None]


class TaskStore:
    """
    Task collection with mutation operations.

    Completion toggles and reschedules are recorded in the event log.
    Listeners are called with the current state after each successful
    mutation; a failed mutation changes nothing and notifies nobody.
    """

    def __init__(
        self,
        state: AppState | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.state = state or AppState()
        self.clock = clock
        self._listeners: list[Listener] = []

    @property
    def events(self) -> EventLog:
        return self.state.events

    def subscribe(self, listener: Listener) -> None:
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener(self.state)

    def _index_of(self, task_id: str) -> int:
        for i, task in enumerate(self.state.tasks):
            if task.id == task_id:
                return i
        raise NotFoundError(f"No task with id {task_id!r}")

    def _new_task(self, title: str, description: str, deadline: date) -> Task:
        return Task(
            id=new_task_id(),
            title=title,
            description=description,
            deadline=deadline,
            created_at=self.clock(),
        )

    def add(self, title: str, description: str = "", deadline: date | str | None = None) -> str:
        """Create a task. Returns its id."""
        task = self._new_task(
            parse_title(title),
            (description or "").strip(),
            parse_deadline(deadline),
        )
        self.state.tasks.append(task)
        logger.debug(f"Added task {task.id} {task.title!r} due {task.deadline}")
        self._changed()
        return task.id

    def add_bulk(self, lines: list[str]) -> int:
        """
        Create one task per 'title, description, deadline' line.

        Lines without a title or a valid deadline are skipped.
        Returns the number of tasks added.
        """
        added = []
        for line in lines:
            if not line.strip():
                continue
            title, description, deadline = parse_bulk_line(line)
            try:
                added.append(self._new_task(parse_title(title), description, parse_deadline(deadline)))
            except ValidationError as e:
                logger.debug(f"Skipping bulk line {line!r}: {e}")

        if added:
            self.state.tasks.extend(added)
            logger.debug(f"Bulk added {len(added)} task(s)")
            self._changed()
        return len(added)

    def toggle_complete(self, task_id: str) -> bool:
        """
        Flip a task's completion. Returns the previous value.

        Every toggle logs a Completed event, un-completing included.
        """
        i = self._index_of(task_id)
        task = self.state.tasks[i]
        previous = task.completed
        self.state.events.append(Completed(title=task.title, occurred_at=self.clock()))
        self.state.tasks[i] = replace(task, completed=not previous)
        logger.debug(f"Toggled task {task_id}: completed={not previous}")
        self._changed()
        return previous

    def reschedule(self, task_id: str, new_deadline: date | str | None) -> None:
        """Move a task's deadline, logging the change."""
        deadline = parse_deadline(new_deadline)
        i = self._index_of(task_id)
        task = self.state.tasks[i]
        self.state.events.append(
            Rescheduled(
                title=task.title,
                from_deadline=task.deadline,
                to_deadline=deadline,
                occurred_at=self.clock(),
            )
        )
        self.state.tasks[i] = replace(task, deadline=deadline)
        logger.debug(f"Rescheduled task {task_id} from {task.deadline} to {deadline}")
        self._changed()

    def remove(self, task_id: str) -> bool:
        """Delete a task if present. Returns True if something was removed."""
        try:
            i = self._index_of(task_id)
        except NotFoundError:
            return False
        del self.state.tasks[i]
        logger.debug(f"Removed task {task_id}")
        self._changed()
        return True

    def get(self, task_id: str) -> Task:
        return self.state.tasks[self._index_of(task_id)]

    def list(self) -> list[Task]:
        """Snapshot of all tasks in insertion order."""
        return list(self.state.tasks)

    def resolve(self, prefix: str) -> str:
        """Resolve a unique id prefix to a full task id."""
        prefix = prefix.strip()
        if not prefix:
            raise NotFoundError("Task id is required")
        matches = [t.id for t in self.state.tasks if t.id.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            raise NotFoundError(f"No task with id {prefix!r}")
        raise ValidationError(f"Task id {prefix!r} is ambiguous ({len(matches)} matches)")
