"""Functional core - pure business logic with no I/O."""

from .notices import Client, Notice, NoticeStatus, Track, parse_notice_date, search_clients
from .buckets import Bucket, CategorizedNotices, TrackBuckets, categorize, actionable, filter_pending
from .calendar import index_dates, month_bounds, month_grid, notices_on
from .stats import StatsChange, delta, format_change, progress_percentage, time_frame_label
from .dashboard import (
    DashboardCounts,
    DashboardStats,
    assemble_dashboard,
    format_dashboard_sections,
    format_notice_line,
)
from .session import ANONYMOUS, Session, User, log_in, log_out
from .files import Breadcrumb, DataItem, ItemKind, build_breadcrumbs, search_items, split_items

__all__ = [
    # Notices
    "Client",
    "Notice",
    "NoticeStatus",
    "Track",
    "parse_notice_date",
    "search_clients",
    # Buckets
    "Bucket",
    "CategorizedNotices",
    "TrackBuckets",
    "categorize",
    "actionable",
    "filter_pending",
    # Calendar
    "index_dates",
    "month_bounds",
    "month_grid",
    "notices_on",
    # Stats
    "StatsChange",
    "delta",
    "format_change",
    "progress_percentage",
    "time_frame_label",
    # Dashboard
    "DashboardCounts",
    "DashboardStats",
    "assemble_dashboard",
    "format_dashboard_sections",
    "format_notice_line",
    # Session
    "ANONYMOUS",
    "Session",
    "User",
    "log_in",
    "log_out",
    # Files
    "Breadcrumb",
    "DataItem",
    "ItemKind",
    "build_breadcrumbs",
    "search_items",
    "split_items",
]
