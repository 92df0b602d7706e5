"""Tests for dashboard assembly."""

from datetime import date, timedelta

import pytest

from noticeboard.core.dashboard import (
    DashboardCounts,
    assemble_dashboard,
    format_dashboard_sections,
    format_notice_line,
)
from noticeboard.core.notices import Client, Notice, NoticeStatus, Track
from noticeboard.core.stats import StatsChange


@pytest.fixture
def today():
    return date(2025, 1, 15)


@pytest.fixture
def sample_notices(today):
    acme = Client(id="c1", name="Acme")
    globex = Client(id="c2", name="Globex")
    return [
        Notice(id="1", heading="GST notice", due_date=today + timedelta(days=2), client=acme),
        Notice(
            id="2",
            heading="Income tax scrutiny",
            due_date=today - timedelta(days=3),
            hearing_date=today - timedelta(days=1),
            status=NoticeStatus.COMPLETED,
            client=acme,
        ),
        Notice(id="3", heading="TDS default", due_date=today - timedelta(days=10), client=globex),
        Notice(
            id="4",
            heading="Appeal",
            due_date=today + timedelta(days=20),
            hearing_date=today + timedelta(days=5),
            client=globex,
        ),
        Notice(id="5", heading="Old reply", due_date=today - timedelta(days=30), status=NoticeStatus.COMPLETED),
    ]


class TestDashboardCounts:
    def test_from_notices(self, sample_notices):
        counts = DashboardCounts.from_notices(sample_notices)
        assert counts == DashboardCounts(total_clients=2, total_notices=5, pending=3, completed=2)

    def test_empty(self):
        assert DashboardCounts.from_notices([]) == DashboardCounts()


class TestAssembleDashboard:
    def test_counts_and_progress(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today)
        assert stats.counts.total_notices == 5
        assert stats.progress == pytest.approx(40.0)
        assert stats.date == today

    def test_total_clients_override(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today, total_clients=7)
        assert stats.counts.total_clients == 7
        assert stats.counts.pending == 3

    def test_raw_and_actionable_views(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today)

        assert [n.id for n in stats.categorized.pending.overdue] == ["2", "3", "5"]
        assert [n.id for n in stats.actionable.pending.overdue] == ["3"]
        # Passed hearings stay visible whatever the notice status
        assert [n.id for n in stats.actionable.hearing.overdue] == ["2"]
        assert [n.id for n in stats.actionable.hearing.this_week] == ["4"]
        assert [n.id for n in stats.actionable.pending.this_month] == ["4"]

    def test_latest_completed_most_recent_first(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today)
        assert [n.id for n in stats.latest_completed] == ["2", "5"]

    def test_latest_limit(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today, latest=1)
        assert [n.id for n in stats.latest_completed] == ["2"]

    def test_no_changes_without_previous(self, sample_notices, today):
        assert assemble_dashboard(sample_notices, today).changes is None

    def test_changes_against_previous(self, sample_notices, today):
        previous = DashboardCounts(total_clients=2, total_notices=4, pending=3, completed=1)
        stats = assemble_dashboard(sample_notices, today, previous=previous)

        assert stats.changes["clients"] == StatsChange(value=0, percentage=0)
        assert stats.changes["notices"] == StatsChange(value=1, percentage=25)
        assert stats.changes["completed"] == StatsChange(value=1, percentage=100)


class TestFormatNoticeLine:
    def test_overdue(self, today):
        notice = Notice(id="1", heading="TDS", due_date=today - timedelta(days=2), client=Client("c", "Acme"))
        line = format_notice_line(notice, Track.DUE, today)
        assert line == "- [Pending] TDS (due 2025-01-13, OVERDUE by 2d, client: Acme)"

    def test_today(self, today):
        notice = Notice(id="1", heading="TDS", due_date=today)
        assert "TODAY" in format_notice_line(notice, Track.DUE, today)

    def test_future_hearing(self, today):
        notice = Notice(id="1", heading="Appeal", due_date=None, hearing_date=today + timedelta(days=4))
        line = format_notice_line(notice, Track.HEARING, today)
        assert "hearing 2025-01-19, in 4d" in line

    def test_no_date(self, today):
        notice = Notice(id="1", heading="X", due_date=None)
        assert "(no date)" in format_notice_line(notice, Track.DUE, today)


class TestFormatDashboardSections:
    def test_sections(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today)
        sections = format_dashboard_sections(stats)

        assert set(sections) == {"summary", "due", "hearing", "completed"}
        assert "Notices: 5" in sections["summary"]
        assert "Progress: 40.0%" in sections["summary"]
        assert "### Overdue (1)" in sections["due"]
        assert "Old reply" in sections["completed"]

    def test_show_all_uses_raw_buckets(self, sample_notices, today):
        stats = assemble_dashboard(sample_notices, today)
        sections = format_dashboard_sections(stats, show_all=True)
        assert "### Overdue (3)" in sections["due"]

    def test_changes_in_summary(self, sample_notices, today):
        previous = DashboardCounts(total_clients=2, total_notices=4, pending=3, completed=1)
        stats = assemble_dashboard(sample_notices, today, previous=previous)
        sections = format_dashboard_sections(stats)
        assert "Notices: 5 (+25% this month)" in sections["summary"]

    def test_empty_buckets(self, today):
        stats = assemble_dashboard([], today)
        sections = format_dashboard_sections(stats)
        assert "### This Week (0)\nNone" in sections["due"]
        assert sections["completed"] == "None"
