"""Ports - interfaces/protocols for external dependencies."""

from .notice_repo import NoticeRepository
from .file_repo import FileRepository
from .auth_service import AuthService
from .backup_source import BackupSource

__all__ = [
    "NoticeRepository",
    "FileRepository",
    "AuthService",
    "BackupSource",
]
