"""Pure notice domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from enum import Enum

# Unset dates come back from the server as the epoch or similar zero values
MIN_VALID_YEAR = 1970


class NoticeStatus(Enum):
    """Completion state of a notice."""

    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: str | None) -> "NoticeStatus":
        """Parse a server status string. Missing status means pending."""
        if not value:
            return cls.PENDING
        return cls(value)


class Track(Enum):
    """Which date of a notice is being categorized."""

    DUE = "dueDate"
    HEARING = "hearingDate"


@dataclass(frozen=True)
class Client:
    """The client a notice belongs to."""

    id: str
    name: str = ""
    client_type: str = ""

    @classmethod
    def from_api(cls, data: dict) -> "Client":
        return cls(id=str(data["_id"]), name=data.get("name") or "", client_type=data.get("type") or "")


def search_clients(clients: list[Client], query: str) -> list[Client]:
    """Case-insensitive name search. Empty query matches everything."""
    query = query.strip().lower()
    if not query:
        return list(clients)
    return [c for c in clients if query in c.name.lower()]


def is_valid_date(d: date | None) -> bool:
    """A real calendar date after 1970."""
    return d is not None and d.year > MIN_VALID_YEAR


def parse_notice_date(value: object, tz: tzinfo | None = None) -> date | None:
    """
    Parse a date as the server sends it.

    Accepts date/datetime objects, plain ISO dates and full ISO timestamps.
    Aware timestamps are converted to `tz` before the calendar date is taken.
    Anything malformed or not after 1970 yields None - never raises.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        d = _local_date(value, tz)
    elif isinstance(value, date):
        d = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            if len(text) > 10:
                d = _local_date(datetime.fromisoformat(text.replace("Z", "+00:00")), tz)
            else:
                d = date.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    return d if is_valid_date(d) else None


def _local_date(dt: datetime, tz: tzinfo | None) -> date | None:
    if tz is not None and dt.tzinfo is not None:
        try:
            return dt.astimezone(tz).date()
        except OverflowError:
            # Conversion would leave the datetime range (year 1 or 9999)
            return None
    return dt.date()


@dataclass(frozen=True)
class Notice:
    """A tracked notice with a due date and an optional hearing date."""

    id: str
    heading: str
    due_date: date | None
    hearing_date: date | None = None
    status: NoticeStatus = NoticeStatus.PENDING
    client: Client | None = None

    @property
    def is_pending(self) -> bool:
        match self.status:
            case NoticeStatus.PENDING:
                return True
            case NoticeStatus.COMPLETED:
                return False

    @property
    def client_name(self) -> str:
        return self.client.name if self.client else ""

    def date_for(self, track: Track) -> date | None:
        """Valid date of this notice on a track, or None."""
        match track:
            case Track.DUE:
                d = self.due_date
            case Track.HEARING:
                d = self.hearing_date
        return d if is_valid_date(d) else None

    @classmethod
    def from_api(cls, data: dict, tz: tzinfo | None = None) -> "Notice":
        """Create Notice from a server JSON record."""
        client_data = data.get("client")
        client = None
        if isinstance(client_data, dict):
            client = Client(id=str(client_data.get("_id", "")), name=client_data.get("name", ""))
        elif client_data:
            # Unpopulated reference: just the id
            client = Client(id=str(client_data))

        return cls(
            id=str(data["_id"]),
            heading=data.get("heading", ""),
            due_date=parse_notice_date(data.get("dueDate"), tz),
            hearing_date=parse_notice_date(data.get("hearingDate"), tz),
            status=NoticeStatus.parse(data.get("status")),
            client=client,
        )
