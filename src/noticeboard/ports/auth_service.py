"""Authentication service interface."""

from typing import Protocol

from noticeboard.core.session import Session


class AuthService(Protocol):
    """Interface for logging in and out against the server."""

    def login(self, email: str, password: str) -> Session:
        """Exchange credentials for a logged-in session."""
        ...

    def logout(self) -> Session:
        """End the session. Returns the anonymous session."""
        ...
