"""Tests for weekly report assembly."""

from datetime import date, datetime, timedelta

import pytest

from asanhai.core.history import Completed, Rescheduled
from asanhai.core.report import build_report, format_report_sections
from asanhai.core.tasks import Task


@pytest.fixture
def now():
    # Tuesday afternoon; week runs Aug 11 - Aug 17
    return datetime(2025, 8, 12, 15, 0)


@pytest.fixture
def events():
    return [
        Completed("Last week", datetime(2025, 8, 10, 22, 0)),
        Completed("Pay rent", datetime(2025, 8, 11, 8, 0)),
        Rescheduled("Dentist", date(2025, 8, 10), date(2025, 8, 20), datetime(2025, 8, 11, 9, 0)),
        Completed("Pay rent", datetime(2025, 8, 12, 10, 0)),
        Rescheduled("Old move", date(2025, 8, 1), date(2025, 8, 2), datetime(2025, 8, 1, 9, 0)),
        Completed("Next week", datetime(2025, 8, 18, 0, 1)),
    ]


@pytest.fixture
def tasks(now):
    today = now.date()
    return [
        Task(id="1", title="Pay rent", deadline=today),
        Task(id="2", title="Old bill", deadline=today - timedelta(days=5)),
        Task(id="3", title="Done bill", deadline=today - timedelta(days=5), completed=True),
        Task(id="4", title="Dentist", deadline=date(2025, 8, 20)),
        Task(id="5", title="Ancient", deadline=date(2024, 1, 1)),
    ]


class TestBuildReport:
    def test_week_scoped_completions_in_log_order(self, events, tasks, now):
        report = build_report(events, tasks, now)
        assert [e.occurred_at for e in report.completed_this_week] == [
            datetime(2025, 8, 11, 8, 0),
            datetime(2025, 8, 12, 10, 0),
        ]

    def test_repeated_completions_not_deduplicated(self, events, tasks, now):
        report = build_report(events, tasks, now)
        assert [e.title for e in report.completed_this_week] == ["Pay rent", "Pay rent"]

    def test_week_scoped_reschedules(self, events, tasks, now):
        report = build_report(events, tasks, now)
        assert len(report.reschedules_this_week) == 1
        move = report.reschedules_this_week[0]
        assert move.title == "Dentist"
        assert move.from_deadline == date(2025, 8, 10)
        assert move.to_deadline == date(2025, 8, 20)

    def test_pending_and_overdue_not_week_scoped(self, events, tasks, now):
        report = build_report(events, tasks, now)
        assert report.pending_titles == ["Pay rent", "Old bill", "Ancient"]
        assert report.overdue_titles == ["Old bill", "Ancient"]

    def test_sunday_night_still_this_week(self, events, tasks):
        report = build_report(events, tasks, datetime(2025, 8, 17, 23, 59))
        assert report.week.start_date == date(2025, 8, 11)
        assert len(report.completed_this_week) == 2

    def test_week_edges(self, tasks, now):
        edge_events = [
            Completed("Sunday before", datetime(2025, 8, 10, 23, 59, 59)),
            Completed("Monday start", datetime(2025, 8, 11, 0, 0)),
            Completed("Sunday end", datetime(2025, 8, 17, 23, 59, 59)),
            Completed("Monday after", datetime(2025, 8, 18, 0, 0)),
        ]
        report = build_report(edge_events, tasks, now)
        assert [e.title for e in report.completed_this_week] == ["Monday start", "Sunday end"]

    def test_next_week_sees_only_its_events(self, events, tasks):
        report = build_report(events, tasks, datetime(2025, 8, 18, 12, 0))
        assert [e.title for e in report.completed_this_week] == ["Next week"]
        assert report.reschedules_this_week == []

    def test_empty_inputs(self, now):
        report = build_report([], [], now)
        assert report.completed_this_week == []
        assert report.reschedules_this_week == []
        assert report.pending_titles == []
        assert report.overdue_titles == []

    def test_accepts_date(self, events, tasks):
        report = build_report(events, tasks, date(2025, 8, 12))
        assert len(report.completed_this_week) == 2


class TestFormatReportSections:
    def test_full(self, events, tasks, now):
        sections = format_report_sections(build_report(events, tasks, now))

        assert sections["completed"] == (
            "- Pay rent on 11/08/2025 08:00\n- Pay rent on 12/08/2025 10:00"
        )
        assert sections["reschedules"] == (
            "- Dentist changed from 10/08/2025 to 20/08/2025 (11/08/2025 09:00)"
        )
        assert sections["pending"] == "Pay rent, Old bill, Ancient"
        assert sections["overdue"] == "Old bill, Ancient"

    def test_empty_sections_say_none(self, now):
        sections = format_report_sections(build_report([], [], now))
        assert sections == {
            "completed": "None",
            "reschedules": "None",
            "pending": "None",
            "overdue": "None",
        }

    def test_custom_formats(self, events, tasks, now):
        sections = format_report_sections(
            build_report(events, tasks, now),
            date_format="%Y-%m-%d",
            timestamp_format="%Y-%m-%dT%H:%M",
        )
        assert "2025-08-10 to 2025-08-20 (2025-08-11T09:00)" in sections["reschedules"]
