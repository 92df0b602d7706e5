"""File repository interface."""

from typing import Protocol

from noticeboard.core.files import DataItem


class FileRepository(Protocol):
    """Interface for browsing the remote folder hierarchy."""

    def list_folder(self, folder_id: str | None = None) -> list[DataItem]:
        """List the items of a folder. None is the root."""
        ...

    def fetch_path(self, folder_id: str) -> list[DataItem]:
        """Fetch the full ancestor path root -> folder in one call."""
        ...

    def create_folder(self, name: str, parent_id: str | None = None) -> DataItem:
        """Create a folder and return it."""
        ...

    def delete_item(self, item_id: str) -> None:
        """Delete a file, or a folder with everything under it."""
        ...
