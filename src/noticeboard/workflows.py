"""Workflow layer between the CLI and the adapters.

Each function fetches what it needs through the ports, runs the pure core
over it, and returns data ready to print.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path

from .adapters.notice_api import NoticeApiAdapter
from .config import DATA_DIR, Config, clear_session, save_session
from .core.calendar import index_dates, month_bounds, notices_on
from .core.dashboard import DashboardCounts, DashboardStats, assemble_dashboard
from .core.files import Breadcrumb, DataItem, build_breadcrumbs, search_items, split_items
from .core.notices import Client, Notice, NoticeStatus, Track, search_clients
from .core.session import Session
from .ports import AuthService, BackupSource, FileRepository, NoticeRepository

logger = logging.getLogger(__name__)


def get_adapter(config: Config) -> NoticeApiAdapter:
    return NoticeApiAdapter(config)


def login(auth: AuthService, email: str, password: str) -> Session:
    """Log in and persist the session."""
    session = auth.login(email, password)
    save_session(session)
    logger.info(f"Logged in as {session.user.email if session.user else '?'}")
    return session


def logout(auth: AuthService) -> Session:
    """Log out and forget the saved session."""
    session = auth.logout()
    clear_session()
    return session


def load_dashboard(
    repo: NoticeRepository,
    config: Config,
    now: datetime | None = None,
    previous: DashboardCounts | None = None,
) -> DashboardStats:
    """Fetch notices and clients, then assemble the dashboard."""
    notices = repo.fetch_all()
    clients = repo.fetch_clients()
    logger.debug(f"Fetched {len(notices)} notices, {len(clients)} clients")
    return assemble_dashboard(
        notices,
        now=now,
        previous=previous,
        latest=config.latest_completed,
        total_clients=len(clients),
    )


def set_notice_status(repo: NoticeRepository, notice_id: str, status: NoticeStatus) -> None:
    """Mark a notice completed or pending on the server."""
    repo.set_status(notice_id, status)
    logger.info(f"Notice {notice_id} marked {status.value}")


def load_clients(repo: NoticeRepository, query: str = "") -> list[Client]:
    """Registered clients sorted by name, optionally filtered."""
    return sorted(search_clients(repo.fetch_clients(), query), key=lambda c: c.name.lower())


def add_client(repo: NoticeRepository, name: str, client_type: str = "") -> Client:
    name = name.strip()
    if not name:
        raise ValueError("Client name is required")
    return repo.add_client(name, client_type.strip())


@dataclass
class MonthView:
    month: date
    marked: set[str]
    notices: list[Notice]


def load_month(repo: NoticeRepository, month: date, track: Track) -> MonthView:
    """Fetch notices and index the dates in the month that have any."""
    notices = repo.fetch_all()
    start, end = month_bounds(month)
    return MonthView(month=start, marked=index_dates(notices, track, start, end), notices=notices)


def load_day(repo: NoticeRepository, day: date, track: Track | None = None) -> list[Notice]:
    """Notices dated on a single day."""
    return notices_on(repo.fetch_all(), day, track)


@dataclass
class FolderView:
    breadcrumbs: list[Breadcrumb]
    folders: list[DataItem]
    files: list[DataItem]


def load_folder(files: FileRepository, folder_id: str | None = None, query: str = "") -> FolderView:
    """List a folder with its breadcrumb trail."""
    items = search_items(files.list_folder(folder_id), query)
    ancestors = files.fetch_path(folder_id) if folder_id else []
    folders, plain_files = split_items(items)
    return FolderView(breadcrumbs=build_breadcrumbs(ancestors), folders=folders, files=plain_files)


def create_folder(files: FileRepository, name: str, parent_id: str | None = None) -> DataItem:
    """Create a folder under parent_id, or at the root."""
    name = name.strip()
    if not name:
        raise ValueError("Folder name is required")
    return files.create_folder(name, parent_id)


def download_backup(source: BackupSource, config: Config, output: str | None = None) -> Path:
    """Download a backup to --output, the configured BACKUP_DIR, or the data dir."""
    if output:
        dest = Path(output)
    elif config.backup_dir:
        dest = Path(config.backup_dir)
    else:
        dest = DATA_DIR / "backups"
    return source.download_backup(dest.expanduser())
