"""Stats change helpers for "+X% vs last period" displays."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal


@dataclass(frozen=True)
class StatsChange:
    value: int
    percentage: int


def delta(current: int, previous: int) -> StatsChange:
    """
    Change from `previous` to `current`.

    Percentage is rounded half away from zero (12.5 -> 13, -12.5 -> -13).
    A zero baseline is reported as 0% regardless of `current`.
    """
    value = current - previous
    if previous == 0:
        return StatsChange(value=value, percentage=0)
    ratio = Decimal(value) * 100 / Decimal(previous)
    return StatsChange(value=value, percentage=int(ratio.quantize(Decimal(1), rounding=ROUND_HALF_UP)))


def time_frame_label(days: int) -> str:
    """Human label for a comparison window of N days."""
    if days <= 1:
        return "today"
    if days <= 7:
        return "this week"
    if days <= 30:
        return "this month"
    return "total"


def progress_percentage(completed: int, total: int) -> float:
    """Share of completed notices, in percent."""
    if total <= 0:
        return 0.0
    return completed / total * 100


def format_change(change: StatsChange, days: int = 30) -> str:
    """Render a change as "+12% this month"."""
    sign = "+" if change.percentage >= 0 else ""
    return f"{sign}{change.percentage}% {time_frame_label(days)}"
