"""asanhai CLI - personal task tracker."""

import json
import logging
import sys
from datetime import datetime

import click

from .adapters.file_state import StorageError, event_to_dict, task_to_dict
from .config import Config, load_config
from .core.errors import NotFoundError, TaskError
from .core.history import Completed, Rescheduled
from .core.report import build_report, format_report_sections
from .core.store import TaskStore
from .core.tasks import Bucket, filter_tasks, format_task_line
from .core.week import count_by_day, format_day_count, week_window
from .workflows import open_store

BUCKET_CHOICES = [b.value for b in Bucket]


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _open(config: Config | None = None) -> TaskStore:
    """Open the configured store, exiting on unreadable state."""
    try:
        return open_store(config or load_config())
    except StorageError as e:
        _fail(e)


@click.group()
@click.version_option(package_name="asanhai")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """asanhai - personal task tracker."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("title")
@click.option("--deadline", "-d", required=True, help="Due date (YYYY-MM-DD)")
@click.option("--desc", default="", help="Optional description")
def add(title: str, deadline: str, desc: str):
    """Add a task."""
    store = _open()
    try:
        task_id = store.add(title, desc, deadline)
    except TaskError as e:
        _fail(e)
    click.echo(f"✓ Added {task_id[:8]}  {store.get(task_id).title}")


@main.command()
@click.argument("source", type=click.File("r"), default="-")
def bulk(source):
    """Add tasks from lines of 'Title, Description, YYYY-MM-DD'."""
    store = _open()
    count = store.add_bulk(source.read().splitlines())
    if count == 0:
        click.echo("No tasks added.")
        return
    click.echo(f"✓ Added {count} task{'s' if count > 1 else ''}")


@main.command("list")
@click.option("--filter", "-f", "bucket", type=click.Choice(BUCKET_CHOICES), default=None,
              help="Which tasks to show (defaults to DEFAULT_FILTER)")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_tasks(bucket: str | None, as_json: bool):
    """List tasks."""
    config = load_config()
    store = _open(config)
    now = datetime.now()
    selected = Bucket(bucket or config.default_filter)
    tasks = filter_tasks(store.list(), selected, now)

    if as_json:
        click.echo(json.dumps([task_to_dict(t) for t in tasks], indent=2))
        return

    if not tasks:
        click.echo(f"No tasks ({selected.label}).")
        return

    click.echo(f"### My Tasks ({selected.label})")
    for task in tasks:
        click.echo(format_task_line(task, now.date(), config.date_format))


@main.command()
@click.argument("task_id")
def toggle(task_id: str):
    """Mark a task complete, or undo completion."""
    store = _open()
    try:
        full_id = store.resolve(task_id)
        was_completed = store.toggle_complete(full_id)
    except TaskError as e:
        _fail(e)
    state = "reopened" if was_completed else "completed"
    click.echo(f"✓ {store.get(full_id).title} {state}")


@main.command()
@click.argument("task_id")
@click.argument("new_date")
def reschedule(task_id: str, new_date: str):
    """Change a task's deadline."""
    store = _open()
    try:
        full_id = store.resolve(task_id)
        store.reschedule(full_id, new_date)
    except TaskError as e:
        _fail(e)
    task = store.get(full_id)
    click.echo(f"✓ {task.title} moved to {task.deadline.isoformat()}")


@main.command()
@click.argument("task_id")
def rm(task_id: str):
    """Delete a task."""
    store = _open()
    try:
        full_id = store.resolve(task_id)
    except NotFoundError:
        click.echo("Nothing to delete.")
        return
    except TaskError as e:
        _fail(e)
    store.remove(full_id)
    click.echo(f"✓ Deleted {full_id[:8]}")


@main.command()
@click.option("--offset", "-o", default=0, type=int, help="Weeks from the current week")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def week(offset: int, as_json: bool):
    """Show task counts for each day of a week."""
    store = _open()
    window = week_window(datetime.now(), offset)
    counts = count_by_day(window, store.list())

    if as_json:
        click.echo(
            json.dumps(
                {
                    "startDate": window.start_date.isoformat(),
                    "days": [{"date": d.isoformat(), "tasks": n} for d, n in counts],
                },
                indent=2,
            )
        )
        return

    click.echo(f"< {window.label()} >")
    for day, count in counts:
        click.echo(f"  {day.strftime('%a %m/%d')}  {format_day_count(count)}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def report(as_json: bool):
    """Show this week's report."""
    config = load_config()
    store = _open(config)
    result = build_report(store.events.all(), store.list(), datetime.now())

    if as_json:
        click.echo(
            json.dumps(
                {
                    "week": result.week.start_date.isoformat(),
                    "completedThisWeek": [event_to_dict(e) for e in result.completed_this_week],
                    "reschedulesThisWeek": [event_to_dict(e) for e in result.reschedules_this_week],
                    "pendingTitles": result.pending_titles,
                    "overdueTitles": result.overdue_titles,
                },
                indent=2,
            )
        )
        return

    sections = format_report_sections(result, config.date_format, config.timestamp_format)
    click.echo(f"## This Week's Report ({result.week.label()})\n")
    click.echo(f"Completed tasks:\n{sections['completed']}\n")
    click.echo(f"Date changes:\n{sections['reschedules']}\n")
    click.echo(f"Pending tasks: {sections['pending']}")
    click.echo(f"Overdue tasks: {sections['overdue']}")


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def history(as_json: bool):
    """Show the full completion and reschedule history."""
    config = load_config()
    store = _open(config)
    events = store.events.all()

    if as_json:
        click.echo(json.dumps([event_to_dict(e) for e in events], indent=2))
        return

    if not events:
        click.echo("No history yet.")
        return

    for event in events:
        when = event.occurred_at.strftime(config.timestamp_format)
        match event:
            case Completed():
                click.echo(f"{when}  completed  {event.title}")
            case Rescheduled():
                click.echo(
                    f"{when}  moved      {event.title}"
                    f" ({event.from_deadline.strftime(config.date_format)}"
                    f" -> {event.to_deadline.strftime(config.date_format)})"
                )


if __name__ == "__main__":
    main()
