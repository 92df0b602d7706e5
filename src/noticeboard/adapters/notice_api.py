"""Notice server adapter - HTTP client for notices, files, auth and backups."""

import logging
from pathlib import Path

import requests

from noticeboard.config import Config, load_config, load_session
from noticeboard.core.files import DataItem
from noticeboard.core.notices import Client, Notice, NoticeStatus
from noticeboard.core.session import Session, User, log_in, log_out

logger = logging.getLogger(__name__)

BACKUP_FILENAME = "noticeboard_backup.zip"
CHUNK_SIZE = 64 * 1024


class AuthenticationError(Exception):
    """Raised when the server rejects or lacks credentials."""

    pass


class ApiError(Exception):
    """Raised when a request fails. The user may retry."""

    pass


class NoticeApiAdapter:
    """
    Notice server adapter.

    Implements NoticeRepository, FileRepository, AuthService and
    BackupSource. No business logic - just I/O.
    """

    def __init__(self, config: Config | None = None, session: Session | None = None):
        self.config = config or load_config()
        self.session = session or load_session()
        self._http = requests.Session()

    def _url(self, endpoint: str) -> str:
        return f"{self.config.api_base_url.rstrip('/')}{endpoint}"

    def _request(self, method: str, endpoint: str, auth: bool = True, **kwargs) -> requests.Response:
        """Make an API request, mapping failures to AuthenticationError/ApiError."""
        headers = kwargs.pop("headers", {})
        if auth:
            if not self.session.is_authenticated:
                raise AuthenticationError("Not logged in. Run 'noticeboard login' first.")
            headers["Authorization"] = f"Bearer {self.session.token}"

        logger.debug(f"{method} {endpoint}")
        try:
            resp = self._http.request(
                method,
                self._url(endpoint),
                headers=headers,
                timeout=self.config.request_timeout,
                **kwargs,
            )
        except requests.RequestException as e:
            raise ApiError(f"Could not reach server: {e}. Please try again.") from e

        if resp.status_code in (401, 403):
            raise AuthenticationError("Session expired or not permitted. Run 'noticeboard login'.")
        try:
            resp.raise_for_status()
        except requests.HTTPError as e:
            raise ApiError(f"{method} {endpoint} failed ({resp.status_code}). Please try again.") from e
        return resp

    def _json(self, resp: requests.Response, what: str) -> dict | list:
        try:
            return resp.json()
        except ValueError as e:
            raise ApiError(f"{what} returned invalid JSON. Please try again.") from e

    def _get_json(self, endpoint: str, **kwargs) -> dict | list:
        return self._json(self._request("GET", endpoint, **kwargs), f"GET {endpoint}")

    def _records(self, data: dict | list, key: str) -> list[dict]:
        """Records from a list body or a {key: [...]} body. Non-objects are skipped."""
        records = data.get(key, []) if isinstance(data, dict) else data
        if not isinstance(records, list):
            logger.warning(f"Expected a list of {key}, got {type(records).__name__}")
            return []
        valid = []
        for record in records:
            if isinstance(record, dict):
                valid.append(record)
            else:
                logger.warning(f"Skipping malformed {key} record: {record!r}")
        return valid

    # ============== Auth ==============

    def login(self, email: str, password: str) -> Session:
        """Exchange credentials for a token."""
        try:
            resp = self._request(
                "POST", "/auth/login", auth=False, json={"email": email, "password": password}
            )
        except AuthenticationError:
            raise AuthenticationError("Invalid email or password") from None

        data = self._json(resp, "Login")
        if not isinstance(data, dict):
            raise ApiError("Login returned an unexpected response. Please try again.")
        if not data.get("token"):
            raise AuthenticationError("Login response did not include a token")

        user = data.get("user")
        self.session = log_in(self.session, User.from_api(user if isinstance(user, dict) else {}), data["token"])
        return self.session

    def logout(self) -> Session:
        """Tell the server to end the session. Local state is cleared regardless."""
        if self.session.is_authenticated:
            try:
                self._request("POST", "/auth/logout")
            except (ApiError, AuthenticationError) as e:
                logger.warning(f"Logout request failed: {e}")
        self.session = log_out(self.session)
        return self.session

    # ============== Notices ==============

    def fetch_all(self) -> list[Notice]:
        """Fetch all notices. Malformed records are skipped."""
        tz = self.config.tz
        notices = []
        for record in self._records(self._get_json("/notices"), "notices"):
            try:
                notices.append(Notice.from_api(record, tz))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed notice {record.get('_id', '?')!r}: {e}")
        return notices

    def set_status(self, notice_id: str, status: NoticeStatus) -> None:
        """Mark a notice completed or pending."""
        match status:
            case NoticeStatus.COMPLETED:
                self._request("PUT", f"/notices/{notice_id}/completed")
            case NoticeStatus.PENDING:
                self._request("PUT", f"/notices/{notice_id}/pending")

    # ============== Clients ==============

    def fetch_clients(self) -> list[Client]:
        """Fetch all registered clients."""
        clients = []
        for record in self._records(self._get_json("/clients"), "clients"):
            try:
                clients.append(Client.from_api(record))
            except KeyError as e:
                logger.warning(f"Skipping client without id: {e}")
        return clients

    def add_client(self, name: str, client_type: str = "") -> Client:
        """Register a new client."""
        resp = self._request("POST", "/clients", json={"name": name, "type": client_type})
        data = self._json(resp, "POST /clients")
        if not isinstance(data, dict) or "_id" not in data:
            raise ApiError("Server did not return the new client. Please refresh and check.")
        return Client.from_api(data)

    def delete_client(self, client_id: str) -> None:
        self._request("DELETE", f"/clients/{client_id}")

    # ============== Files ==============

    def _items(self, data: dict | list) -> list[DataItem]:
        items = []
        for record in self._records(data, "items"):
            try:
                items.append(DataItem.from_api(record))
            except (KeyError, ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed item {record.get('_id', '?')!r}: {e}")
        return items

    def list_folder(self, folder_id: str | None = None) -> list[DataItem]:
        """List the items of a folder. None is the root."""
        params = {"parentId": folder_id} if folder_id else None
        return self._items(self._get_json("/data", params=params))

    def fetch_path(self, folder_id: str) -> list[DataItem]:
        """Fetch the ancestor path root -> folder."""
        return self._items(self._get_json(f"/data/{folder_id}/path"))

    def create_folder(self, name: str, parent_id: str | None = None) -> DataItem:
        """Create a folder. None parent is the root."""
        resp = self._request("POST", "/data/folder", json={"name": name, "parentId": parent_id})
        data = self._json(resp, "POST /data/folder")
        try:
            return DataItem.from_api(data)
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise ApiError("Server did not return the new folder. Please refresh and check.") from e

    def delete_item(self, item_id: str) -> None:
        """Delete a file, or a folder with its contents."""
        self._request("DELETE", f"/data/{item_id}")

    # ============== Backup ==============

    def download_backup(self, dest_dir: Path) -> Path:
        """Stream the backup archive to dest_dir. Returns the file path."""
        dest_dir = Path(dest_dir).expanduser()
        dest_dir.mkdir(parents=True, exist_ok=True)
        output = dest_dir / BACKUP_FILENAME

        resp = self._request("GET", "/backup/download", stream=True)
        try:
            with open(output, "wb") as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
        except requests.RequestException as e:
            output.unlink(missing_ok=True)
            raise ApiError(f"Backup download interrupted: {e}. Please try again.") from e
        finally:
            resp.close()

        logger.info(f"Backup saved to {output}")
        return output
