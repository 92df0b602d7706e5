"""Notice categorization into due/hearing time buckets - no I/O dependencies."""

import calendar
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from enum import Enum

from .notices import Notice, Track

WEEK_DAYS = 7


class Bucket(Enum):
    """Time bucket within a track."""

    THIS_WEEK = "thisWeek"
    THIS_MONTH = "thisMonth"
    OVERDUE = "overdue"


@dataclass
class TrackBuckets:
    """The three buckets of one track. Membership is mutually exclusive."""

    this_week: list[Notice] = field(default_factory=list)
    this_month: list[Notice] = field(default_factory=list)
    overdue: list[Notice] = field(default_factory=list)

    def get(self, bucket: Bucket) -> list[Notice]:
        match bucket:
            case Bucket.THIS_WEEK:
                return self.this_week
            case Bucket.THIS_MONTH:
                return self.this_month
            case Bucket.OVERDUE:
                return self.overdue

    def counts(self) -> dict[str, int]:
        return {b.value: len(self.get(b)) for b in Bucket}

    def to_dict(self) -> dict[str, list[Notice]]:
        return {b.value: list(self.get(b)) for b in Bucket}


@dataclass
class CategorizedNotices:
    """Bucketed notices for both tracks. `pending` is the due-date track."""

    pending: TrackBuckets
    hearing: TrackBuckets

    def track(self, track: Track) -> TrackBuckets:
        match track:
            case Track.DUE:
                return self.pending
            case Track.HEARING:
                return self.hearing

    def to_dict(self) -> dict[str, dict[str, list[Notice]]]:
        return {"pending": self.pending.to_dict(), "hearing": self.hearing.to_dict()}


def as_day(now: datetime | date | None) -> date:
    """Reference day for classification. Defaults to today."""
    if now is None:
        return date.today()
    if isinstance(now, datetime):
        return now.date()
    return now


def month_window_end(today: date) -> date:
    """
    Same day-of-month in the next calendar month.

    Clamped to the last day of that month, so Jan 31 maps to Feb 28/29.
    """
    year, month = (today.year + 1, 1) if today.month == 12 else (today.year, today.month + 1)
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(today.day, last_day))


def classify_date(d: date, today: date) -> Bucket | None:
    """
    Bucket for a single valid date relative to `today`.

    Today itself is not overdue and counts as this week. Both ends of the
    week window are inclusive. Dates past the month window get no bucket.
    """
    if d < today:
        return Bucket.OVERDUE
    if d <= today + timedelta(days=WEEK_DAYS):
        return Bucket.THIS_WEEK
    if d <= month_window_end(today):
        return Bucket.THIS_MONTH
    return None


def categorize_track(
    notices: list[Notice],
    track: Track,
    now: datetime | date | None = None,
) -> TrackBuckets:
    """
    Bucket notices by their date on one track.

    Pure function - no I/O. Notices without a valid date on the track are
    left out. Status is ignored.
    """
    today = as_day(now)
    buckets = TrackBuckets()
    for notice in notices:
        d = notice.date_for(track)
        if d is None:
            continue
        bucket = classify_date(d, today)
        if bucket is not None:
            buckets.get(bucket).append(notice)
    return buckets


def categorize(
    notices: list[Notice],
    now: datetime | date | None = None,
) -> CategorizedNotices:
    """
    Partition notices into this-week/this-month/overdue for both tracks.

    Pure function - no I/O. Deterministic for a fixed `now`; input order is
    kept inside each bucket. Completed notices are bucketed too, see
    `actionable` for the display filter.
    """
    today = as_day(now)
    return CategorizedNotices(
        pending=categorize_track(notices, Track.DUE, today),
        hearing=categorize_track(notices, Track.HEARING, today),
    )


def filter_pending(notices: list[Notice]) -> list[Notice]:
    """Filter to notices still pending."""
    return [n for n in notices if n.is_pending]


def actionable(categorized: CategorizedNotices) -> CategorizedNotices:
    """
    Display view of categorized notices.

    Due track: pending notices only, in every bucket.
    Hearing track: pending only for this week/this month, but overdue
    hearings keep every status since a hearing passing does not depend on
    the notice being completed.
    """
    due = categorized.pending
    hearing = categorized.hearing
    return CategorizedNotices(
        pending=TrackBuckets(
            this_week=filter_pending(due.this_week),
            this_month=filter_pending(due.this_month),
            overdue=filter_pending(due.overdue),
        ),
        hearing=TrackBuckets(
            this_week=filter_pending(hearing.this_week),
            this_month=filter_pending(hearing.this_month),
            overdue=list(hearing.overdue),
        ),
    )
