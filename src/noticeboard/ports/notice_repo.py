"""Notice repository interface."""

from typing import Protocol

from noticeboard.core.notices import Client, Notice, NoticeStatus


class NoticeRepository(Protocol):
    """Interface for fetching notices from any backend."""

    def fetch_all(self) -> list[Notice]:
        """Fetch all notices."""
        ...

    def set_status(self, notice_id: str, status: NoticeStatus) -> None:
        """Mark a notice completed or pending."""
        ...

    def fetch_clients(self) -> list[Client]:
        """Fetch all registered clients."""
        ...

    def add_client(self, name: str, client_type: str = "") -> Client:
        """Register a new client and return it."""
        ...

    def delete_client(self, client_id: str) -> None:
        ...
