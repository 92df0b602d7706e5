"""Session state as explicit transitions - no I/O dependencies."""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str
    role: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "User":
        return cls(
            id=str(data.get("id") or data.get("_id", "")),
            name=data.get("name", ""),
            email=data.get("email", ""),
            role=data.get("role", ""),
        )


@dataclass(frozen=True)
class Session:
    """Who is logged in, and the bearer token for the API."""

    user: User | None = None
    token: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


ANONYMOUS = Session()


def log_in(session: Session, user: User, token: str) -> Session:
    """Transition to a logged-in session. Replaces any previous login."""
    if not token:
        raise ValueError("Cannot log in without a token")
    return Session(user=user, token=token)


def log_out(session: Session) -> Session:
    """Transition to the anonymous session."""
    return ANONYMOUS
