"""Pure calendar helpers for the month view - no I/O dependencies."""

import calendar
from datetime import date, timedelta

from .notices import Notice, Track


def month_bounds(month: date) -> tuple[date, date]:
    """First and last day of the month containing `month`."""
    last_day = calendar.monthrange(month.year, month.month)[1]
    return month.replace(day=1), month.replace(day=last_day)


def index_dates(
    notices: list[Notice],
    track: Track,
    start: date | None = None,
    end: date | None = None,
) -> set[str]:
    """
    Distinct YYYY-MM-DD dates with at least one notice on the track.

    Optionally scoped to the inclusive range [start, end].
    Pure function - no I/O.
    """
    dates = set()
    for notice in notices:
        d = notice.date_for(track)
        if d is None:
            continue
        if start and d < start:
            continue
        if end and d > end:
            continue
        dates.add(d.isoformat())
    return dates


def notices_on(
    notices: list[Notice],
    day: date,
    track: Track | None = None,
) -> list[Notice]:
    """Notices dated on `day`, on one track or on either when track is None."""
    tracks = [track] if track else list(Track)
    return [n for n in notices if any(n.date_for(t) == day for t in tracks)]


def month_grid(month: date) -> list[list[date]]:
    """
    Sunday-start weeks covering the month.

    Leading and trailing days from the adjacent months pad the first and
    last week to seven days.
    """
    first, last = month_bounds(month)
    # weekday(): Monday=0 .. Sunday=6
    start = first - timedelta(days=(first.weekday() + 1) % 7)
    end = last + timedelta(days=(5 - last.weekday()) % 7)

    weeks = []
    current = start
    while current <= end:
        weeks.append([current + timedelta(days=i) for i in range(7)])
        current += timedelta(days=7)
    return weeks
