"""Backup download interface."""

from pathlib import Path
from typing import Protocol


class BackupSource(Protocol):
    """Interface for downloading a full data backup."""

    def download_backup(self, dest_dir: Path) -> Path:
        """Download the backup archive into a directory. Returns the file path."""
        ...
