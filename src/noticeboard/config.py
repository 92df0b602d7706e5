"""Configuration management for Noticeboard."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .core.session import ANONYMOUS, Session, User

logger = logging.getLogger(__name__)

NOTICEBOARD_HOME = Path(os.environ.get("NOTICEBOARD_HOME", Path.home() / "noticeboard"))
CONFIG_FILE = NOTICEBOARD_HOME / "config" / "noticeboard.conf"
SESSION_FILE = NOTICEBOARD_HOME / "config" / ".session.json"
DATA_DIR = NOTICEBOARD_HOME / "data"


@dataclass
class Config:
    """Noticeboard configuration."""

    api_base_url: str = "http://localhost:5000/api"
    timezone: str = "Asia/Kolkata"
    request_timeout: float = 30.0
    backup_dir: str = ""
    latest_completed: int = 5

    @property
    def tz(self) -> ZoneInfo | None:
        """Timezone for converting server timestamps to calendar dates."""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning(f"Unknown timezone {self.timezone!r}, using dates as sent")
            return None


def save_session(session: Session) -> None:
    """Save the session to file, readable by the owner only."""
    SESSION_FILE.parent.mkdir(parents=True, exist_ok=True)
    user = session.user
    data = {
        "token": session.token,
        "user": (
            {"id": user.id, "name": user.name, "email": user.email, "role": user.role}
            if user
            else None
        ),
    }
    fd = os.open(SESSION_FILE, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    # The open mode only applies to new files
    os.fchmod(fd, 0o600)
    with os.fdopen(fd, "w") as f:
        json.dump(data, f)


def load_session() -> Session:
    """Load the session from file. Missing or unreadable files are anonymous."""
    if not SESSION_FILE.exists():
        return ANONYMOUS
    try:
        data = json.loads(SESSION_FILE.read_text())
        user = User.from_api(data["user"]) if data.get("user") else None
        return Session(user=user, token=data.get("token") or None)
    except (json.JSONDecodeError, KeyError, TypeError, AttributeError) as e:
        logger.warning(f"Ignoring unreadable session file: {e}")
        return ANONYMOUS


def clear_session() -> None:
    """Remove the saved session."""
    SESSION_FILE.unlink(missing_ok=True)


def _parse_value(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from noticeboard.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _parse_value(value.strip())

        match key:
            case "api_base_url":
                config.api_base_url = value.rstrip("/")
            case "timezone":
                config.timezone = value
            case "request_timeout":
                try:
                    config.request_timeout = float(value)
                except ValueError:
                    logger.warning(f"Invalid REQUEST_TIMEOUT {value!r}, keeping {config.request_timeout}")
            case "backup_dir":
                config.backup_dir = value
            case "latest_completed":
                try:
                    config.latest_completed = int(value)
                except ValueError:
                    logger.warning(f"Invalid LATEST_COMPLETED {value!r}, keeping {config.latest_completed}")

    return config
