"""
Backend Client.
Thin async wrapper over the hosted backend: REST tables, auth and object storage.
"""
import httpx
import logging
from typing import Any, Dict, List, Optional, Union

from .errors import BackendError
from ..config import get_backend_config

logger = logging.getLogger(__name__)

Row = Dict[str, Any]


def _error_message(response: httpx.Response) -> str:
    """Pull the human-readable message out of an error response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "msg", "error_description", "error"):
            if payload.get(key):
                return str(payload[key])
    return response.text or f"HTTP {response.status_code}"


def _filter_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


class TableQuery:
    """
    Builder for one request against a table.

    Usage mirrors the hosted SDK:
        await client.table("events").select().eq("id", event_id).single().execute()
    """

    def __init__(self, client: "BackendClient", table: str):
        self._client = client
        self._table = table
        self._method = "GET"
        self._columns = "*"
        self._body: Any = None
        self._filters: List[tuple] = []
        self._order: List[str] = []
        self._single = False

    def select(self, columns: str = "*") -> "TableQuery":
        self._method = "GET"
        self._columns = columns
        return self

    def insert(self, rows: Union[Row, List[Row]]) -> "TableQuery":
        self._method = "POST"
        self._body = rows if isinstance(rows, list) else [rows]
        return self

    def update(self, values: Row) -> "TableQuery":
        self._method = "PATCH"
        self._body = values
        return self

    def delete(self) -> "TableQuery":
        self._method = "DELETE"
        return self

    def eq(self, column: str, value: Any) -> "TableQuery":
        self._filters.append((column, f"eq.{_filter_value(value)}"))
        return self

    def order(self, column: str, ascending: bool = True) -> "TableQuery":
        self._order.append(f"{column}.{'asc' if ascending else 'desc'}")
        return self

    def single(self) -> "TableQuery":
        """Return the first matching row (or None) instead of a list."""
        self._single = True
        return self

    def _params(self) -> List[tuple]:
        params = []
        if self._method == "GET":
            params.append(("select", self._columns))
        params.extend(self._filters)
        if self._order:
            params.append(("order", ",".join(self._order)))
        if self._single:
            params.append(("limit", "1"))
        return params

    async def execute(self) -> Union[List[Row], Optional[Row]]:
        """Send the request and return the decoded rows."""
        headers = {}
        if self._method != "GET":
            headers["Prefer"] = "return=representation"
        response = await self._client.request(
            self._method,
            f"/rest/v1/{self._table}",
            params=self._params(),
            json=self._body,
            headers=headers,
        )
        rows = response.json() if response.content else []
        if not isinstance(rows, list):
            rows = [rows]
        if self._single:
            return rows[0] if rows else None
        return rows


class AuthClient:
    """Email/password auth against the backend."""

    def __init__(self, client: "BackendClient"):
        self._client = client

    async def sign_in_with_password(self, email: str, password: str) -> dict:
        response = await self._client.request(
            "POST",
            "/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = response.json()
        self._client.access_token = session.get("access_token")
        logger.info(f"Signed in {email}")
        return session

    async def sign_up(self, email: str, password: str) -> dict:
        response = await self._client.request(
            "POST",
            "/auth/v1/signup",
            json={"email": email, "password": password},
        )
        return response.json()

    async def sign_out(self) -> None:
        if self._client.access_token:
            await self._client.request("POST", "/auth/v1/logout")
        self._client.access_token = None

    async def get_user(self) -> Optional[dict]:
        """Return the signed-in user, or None when there is no valid session."""
        if not self._client.access_token:
            return None
        try:
            response = await self._client.request("GET", "/auth/v1/user")
        except BackendError as e:
            if e.status_code in (401, 403):
                return None
            raise
        return response.json()


class StorageBucket:
    """Object storage operations scoped to one bucket."""

    def __init__(self, client: "BackendClient", bucket: str):
        self._client = client
        self.bucket = bucket

    async def upload(self, path: str, data: bytes, content_type: str) -> str:
        await self._client.request(
            "POST",
            f"/storage/v1/object/{self.bucket}/{path}",
            content=data,
            headers={"Content-Type": content_type, "x-upsert": "false"},
        )
        return path

    async def download(self, path: str) -> bytes:
        response = await self._client.request(
            "GET",
            f"/storage/v1/object/{self.bucket}/{path}",
        )
        return response.content

    async def create_signed_url(self, path: str, expires_in: int) -> str:
        response = await self._client.request(
            "POST",
            f"/storage/v1/object/sign/{self.bucket}/{path}",
            json={"expiresIn": expires_in},
        )
        signed = response.json().get("signedURL", "")
        if signed.startswith("http"):
            return signed
        return f"{self._client.base_url}/storage/v1{signed}"

    async def remove(self, paths: List[str]) -> None:
        await self._client.request(
            "DELETE",
            f"/storage/v1/object/{self.bucket}",
            json={"prefixes": paths},
        )


class StorageClient:
    """Entry point for bucket operations."""

    def __init__(self, client: "BackendClient"):
        self._client = client

    def from_(self, bucket: str) -> StorageBucket:
        return StorageBucket(self._client, bucket)


class BackendClient:
    """
    Async client for the hosted backend.

    One instance is created at application start and owns the HTTP
    connection pool; per-request copies made with `with_token` share it.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        http: Optional[httpx.AsyncClient] = None,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self._http = http or httpx.AsyncClient(timeout=timeout)
        self._owns_http = http is None
        self.auth = AuthClient(self)
        self.storage = StorageClient(self)

    @classmethod
    def from_settings(cls) -> "BackendClient":
        return cls(**get_backend_config())

    def with_token(self, access_token: Optional[str]) -> "BackendClient":
        """A client acting as the given user, sharing this client's pool."""
        clone = BackendClient(
            self.base_url,
            self.api_key,
            http=self._http,
            access_token=access_token,
        )
        return clone

    def table(self, name: str) -> TableQuery:
        return TableQuery(self, name)

    def _headers(self, extra: Optional[dict] = None) -> dict:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params=None,
        json=None,
        content: Optional[bytes] = None,
        headers: Optional[dict] = None,
    ) -> httpx.Response:
        """Send a request; any failure is raised as BackendError."""
        url = f"{self.base_url}{path}"
        try:
            response = await self._http.request(
                method,
                url,
                params=params,
                json=json,
                content=content,
                headers=self._headers(headers),
            )
        except httpx.HTTPError as e:
            logger.error(f"Backend request {method} {path} failed: {e}")
            raise BackendError(str(e)) from e

        if response.is_error:
            message = _error_message(response)
            logger.error(f"Backend {method} {path} -> {response.status_code}: {message}")
            raise BackendError(message, status_code=response.status_code)

        logger.debug(f"Backend {method} {path} -> {response.status_code}")
        return response

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()
