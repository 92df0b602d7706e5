"""Tests for the workflow layer."""

from datetime import date, datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from noticeboard.config import DATA_DIR, Config
from noticeboard.core.files import DataItem, ItemKind
from noticeboard.core.notices import Client, Notice, NoticeStatus, Track
from noticeboard.core.session import ANONYMOUS, Session, User
from noticeboard.workflows import (
    add_client,
    create_folder,
    download_backup,
    load_clients,
    load_dashboard,
    load_day,
    load_folder,
    load_month,
    login,
    logout,
    set_notice_status,
)


@pytest.fixture
def config():
    return Config(latest_completed=2)


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.fetch_all.return_value = [
        Notice(id="1", heading="A", due_date=date(2025, 1, 16), client=Client("c1", "Acme")),
        Notice(id="2", heading="B", due_date=date(2025, 1, 10), hearing_date=date(2025, 2, 3)),
        Notice(id="3", heading="C", due_date=date(2025, 2, 3)),
    ]
    repo.fetch_clients.return_value = [Client("c1", "Acme"), Client("c2", "Globex"), Client("c3", "Initech")]
    return repo


class TestLogin:
    @patch("noticeboard.workflows.save_session")
    def test_saves_session(self, mock_save):
        session = Session(user=User(id="u1", name="A", email="a@x"), token="tok")
        auth = MagicMock()
        auth.login.return_value = session

        assert login(auth, "a@x", "pw") is session
        auth.login.assert_called_once_with("a@x", "pw")
        mock_save.assert_called_once_with(session)

    @patch("noticeboard.workflows.save_session")
    def test_failed_login_saves_nothing(self, mock_save):
        auth = MagicMock()
        auth.login.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            login(auth, "a@x", "pw")
        mock_save.assert_not_called()

    @patch("noticeboard.workflows.clear_session")
    def test_logout_clears_file(self, mock_clear):
        auth = MagicMock()
        auth.logout.return_value = ANONYMOUS
        assert logout(auth) == ANONYMOUS
        mock_clear.assert_called_once()


class TestLoadDashboard:
    def test_uses_server_client_count(self, repo, config):
        stats = load_dashboard(repo, config, now=datetime(2025, 1, 15, 9, 0))
        assert stats.counts.total_clients == 3
        assert stats.counts.total_notices == 3

    def test_buckets(self, repo, config):
        stats = load_dashboard(repo, config, now=datetime(2025, 1, 15, 9, 0))
        assert [n.id for n in stats.actionable.pending.this_week] == ["1"]
        assert [n.id for n in stats.actionable.pending.overdue] == ["2"]
        assert [n.id for n in stats.actionable.pending.this_month] == ["3"]
        assert [n.id for n in stats.actionable.hearing.this_month] == ["2"]


class TestLoadMonth:
    def test_marks_dates_in_month(self, repo):
        view = load_month(repo, date(2025, 1, 20), Track.DUE)
        assert view.month == date(2025, 1, 1)
        assert view.marked == {"2025-01-16", "2025-01-10"}

    def test_hearing_track(self, repo):
        view = load_month(repo, date(2025, 2, 1), Track.HEARING)
        assert view.marked == {"2025-02-03"}


class TestLoadDay:
    def test_either_track(self, repo):
        found = load_day(repo, date(2025, 2, 3))
        assert [n.id for n in found] == ["2", "3"]


class TestLoadFolder:
    def test_root_skips_path_lookup(self):
        files = MagicMock()
        files.list_folder.return_value = [
            DataItem(id="a", name="Clients", kind=ItemKind.FOLDER),
            DataItem(id="x", name="index.pdf", kind=ItemKind.FILE),
        ]
        view = load_folder(files)

        files.fetch_path.assert_not_called()
        assert [c.name for c in view.breadcrumbs] == ["Home"]
        assert [i.id for i in view.folders] == ["a"]
        assert [i.id for i in view.files] == ["x"]

    def test_subfolder_breadcrumbs(self):
        files = MagicMock()
        files.list_folder.return_value = []
        files.fetch_path.return_value = [
            DataItem(id="a", name="Clients", kind=ItemKind.FOLDER),
            DataItem(id="b", name="Acme", kind=ItemKind.FOLDER, parent_id="a"),
        ]
        view = load_folder(files, "b")

        files.list_folder.assert_called_once_with("b")
        files.fetch_path.assert_called_once_with("b")
        assert [c.name for c in view.breadcrumbs] == ["Home", "Clients", "Acme"]

    def test_search(self):
        files = MagicMock()
        files.list_folder.return_value = [
            DataItem(id="x", name="reply.pdf", kind=ItemKind.FILE),
            DataItem(id="y", name="order.pdf", kind=ItemKind.FILE),
        ]
        view = load_folder(files, query="ORDER")
        assert [i.id for i in view.files] == ["y"]


class TestDownloadBackup:
    def test_explicit_output(self, config):
        source = MagicMock()
        download_backup(source, config, "/tmp/out")
        source.download_backup.assert_called_once_with(Path("/tmp/out"))

    def test_configured_dir(self):
        source = MagicMock()
        download_backup(source, Config(backup_dir="/srv/backups"))
        source.download_backup.assert_called_once_with(Path("/srv/backups"))

    def test_default_dir(self, config):
        source = MagicMock()
        download_backup(source, config)
        source.download_backup.assert_called_once_with(DATA_DIR / "backups")


class TestNoticeStatus:
    def test_set_status(self, repo):
        set_notice_status(repo, "1", NoticeStatus.COMPLETED)
        repo.set_status.assert_called_once_with("1", NoticeStatus.COMPLETED)


class TestClients:
    def test_sorted_by_name(self, repo):
        repo.fetch_clients.return_value = [Client("c2", "globex"), Client("c1", "Acme")]
        assert [c.id for c in load_clients(repo)] == ["c1", "c2"]

    def test_search(self, repo):
        assert [c.id for c in load_clients(repo, "init")] == ["c3"]

    def test_add_strips_name(self, repo):
        add_client(repo, "  Umbrella ", "Company")
        repo.add_client.assert_called_once_with("Umbrella", "Company")

    def test_add_requires_name(self, repo):
        with pytest.raises(ValueError):
            add_client(repo, "   ")
        repo.add_client.assert_not_called()


class TestCreateFolder:
    def test_create(self):
        files = MagicMock()
        create_folder(files, " Orders ", "f1")
        files.create_folder.assert_called_once_with("Orders", "f1")

    def test_requires_name(self):
        files = MagicMock()
        with pytest.raises(ValueError):
            create_folder(files, "")
        files.create_folder.assert_not_called()
