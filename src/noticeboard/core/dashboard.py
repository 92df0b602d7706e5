"""Pure dashboard assembly logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime

from .buckets import Bucket, CategorizedNotices, actionable, as_day, categorize
from .notices import Notice, NoticeStatus, Track
from .stats import StatsChange, delta, format_change, progress_percentage

BUCKET_LABELS = {
    Bucket.THIS_WEEK: "This Week",
    Bucket.THIS_MONTH: "This Month",
    Bucket.OVERDUE: "Overdue",
}

TRACK_LABELS = {
    Track.DUE: "Due",
    Track.HEARING: "Hearing",
}


@dataclass(frozen=True)
class DashboardCounts:
    """Headline counts shown on the dashboard cards."""

    total_clients: int = 0
    total_notices: int = 0
    pending: int = 0
    completed: int = 0

    @classmethod
    def from_notices(cls, notices: list[Notice]) -> "DashboardCounts":
        clients = {n.client.id for n in notices if n.client and n.client.id}
        pending = sum(1 for n in notices if n.status is NoticeStatus.PENDING)
        return cls(
            total_clients=len(clients),
            total_notices=len(notices),
            pending=pending,
            completed=len(notices) - pending,
        )


@dataclass
class DashboardStats:
    """Assembled dashboard data ready for formatting."""

    date: date
    counts: DashboardCounts
    progress: float
    categorized: CategorizedNotices
    actionable: CategorizedNotices
    latest_completed: list[Notice]
    changes: dict[str, StatsChange] | None = None


def compute_changes(current: DashboardCounts, previous: DashboardCounts) -> dict[str, StatsChange]:
    return {
        "clients": delta(current.total_clients, previous.total_clients),
        "notices": delta(current.total_notices, previous.total_notices),
        "pending": delta(current.pending, previous.pending),
        "completed": delta(current.completed, previous.completed),
    }


def assemble_dashboard(
    notices: list[Notice],
    now: datetime | date | None = None,
    previous: DashboardCounts | None = None,
    latest: int = 5,
    total_clients: int | None = None,
) -> DashboardStats:
    """
    Assemble dashboard data from the raw notice list.

    Pure function - no I/O. `total_clients` overrides the count derived from
    notices, since clients without notices are only known to the server.
    """
    today = as_day(now)
    counts = DashboardCounts.from_notices(notices)
    if total_clients is not None:
        counts = DashboardCounts(
            total_clients=total_clients,
            total_notices=counts.total_notices,
            pending=counts.pending,
            completed=counts.completed,
        )

    categorized = categorize(notices, today)

    completed = [n for n in notices if n.status is NoticeStatus.COMPLETED]
    # Most recent due date first; undated ones last
    completed.sort(key=lambda n: n.due_date or date.min, reverse=True)

    return DashboardStats(
        date=today,
        counts=counts,
        progress=progress_percentage(counts.completed, counts.total_notices),
        categorized=categorized,
        actionable=actionable(categorized),
        latest_completed=completed[:latest],
        changes=compute_changes(counts, previous) if previous else None,
    )


def format_notice_line(notice: Notice, track: Track, as_of: date | None = None) -> str:
    """
    Format a single notice for display.

    Pure function - no I/O.
    """
    as_of = as_of or date.today()
    d = notice.date_for(track)

    when = "no date"
    if d is not None:
        days = (d - as_of).days
        if days < 0:
            when = f"OVERDUE by {-days}d"
        elif days == 0:
            when = "TODAY"
        else:
            when = f"in {days}d"
        when = f"{TRACK_LABELS[track].lower()} {d.isoformat()}, {when}"

    client = f", client: {notice.client_name}" if notice.client_name else ""
    return f"- [{notice.status.value}] {notice.heading} ({when}{client})"


def format_dashboard_sections(data: DashboardStats, show_all: bool = False) -> dict[str, str]:
    """
    Format dashboard data into text sections.

    Pure function - no I/O.
    Returns dict with keys: summary, due, hearing, completed
    """
    c = data.counts
    changes = data.changes or {}

    def count_line(label: str, value: int, key: str) -> str:
        change = f" ({format_change(changes[key])})" if key in changes else ""
        return f"{label}: {value}{change}"

    summary = "\n".join(
        [
            count_line("Clients", c.total_clients, "clients"),
            count_line("Notices", c.total_notices, "notices"),
            count_line("Pending", c.pending, "pending"),
            count_line("Completed", c.completed, "completed"),
            f"Progress: {data.progress:.1f}%",
        ]
    )

    view = data.categorized if show_all else data.actionable

    def track_section(track: Track) -> str:
        buckets = view.track(track)
        parts = []
        for bucket in Bucket:
            notices = buckets.get(bucket)
            lines = "\n".join(format_notice_line(n, track, data.date) for n in notices) or "None"
            parts.append(f"### {BUCKET_LABELS[bucket]} ({len(notices)})\n{lines}")
        return "\n\n".join(parts)

    completed_md = (
        "\n".join(format_notice_line(n, Track.DUE, data.date) for n in data.latest_completed)
        or "None"
    )

    return {
        "summary": summary,
        "due": track_section(Track.DUE),
        "hearing": track_section(Track.HEARING),
        "completed": completed_md,
    }
