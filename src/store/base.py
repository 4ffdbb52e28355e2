"""PostgREST client for the hosted league database."""

import logging
from typing import Any, Mapping, Optional, Sequence, Union

import requests


logger = logging.getLogger(__name__)

# PostgREST error code for "no row" on a single-object request
NOT_FOUND_CODE = "PGRST116"

SINGLE_OBJECT_MEDIA_TYPE = "application/vnd.pgrst.object+json"

Row = dict[str, Any]


class StoreError(Exception):
    """Base exception for data store errors."""

    pass


class NotFoundError(StoreError):
    """Raised when a single-row request matches no row."""

    pass


class RemoteError(StoreError):
    """Raised when the store rejects a request or cannot be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.code = code


class RestClient:
    """
    Minimal row-level CRUD client for a Supabase PostgREST endpoint.

    Every call targets one named table. Filters are equality matches on
    columns; ordering and limits map directly to PostgREST query parameters.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        access_token: Optional[str] = None,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: PostgREST root, e.g. https://<project>.supabase.co/rest/v1
            api_key: Project anon key.
            access_token: User JWT; the anon key is used when omitted.
            timeout: Request timeout in seconds.
            session: Session to reuse (a new one is created otherwise).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        # Session for connection reuse
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "apikey": api_key,
                "Authorization": f"Bearer {access_token or api_key}",
                "Content-Type": "application/json",
                "Accept": "application/json",
            }
        )

    def _url(self, table: str) -> str:
        return f"{self.base_url}/{table}"

    @staticmethod
    def _filter_params(filters: Optional[Mapping[str, Any]]) -> dict[str, str]:
        """Translate column equality filters to PostgREST parameters."""
        params: dict[str, str] = {}
        for column, value in (filters or {}).items():
            if isinstance(value, bool):
                value = str(value).lower()
            params[column] = f"eq.{value}"
        return params

    def _request(
        self,
        method: str,
        table: str,
        params: Optional[Mapping[str, str]] = None,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """
        Send a request and decode the JSON body.

        Raises:
            NotFoundError: If a single-row request matched nothing.
            RemoteError: If the request fails for any other reason.
        """
        url = self._url(table)
        logger.debug("%s %s params=%s", method, url, params)

        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout:
            logger.error("Request to %s timed out", table)
            raise RemoteError(f"Request timed out: {table}")
        except requests.exceptions.HTTPError as e:
            raise self._http_error(table, e.response)
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed: %s", table, e)
            raise RemoteError(f"Request failed: {table} - {e}")

        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _http_error(table: str, response: requests.Response) -> StoreError:
        """Build the StoreError for an error response."""
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        code = body.get("code")
        message = body.get("message") or response.text or f"HTTP {response.status_code}"

        if code == NOT_FOUND_CODE:
            return NotFoundError(f"No row found in {table}")

        logger.error("Store error on %s (%s): %s", table, response.status_code, message)
        return RemoteError(message, status_code=response.status_code, code=code)

    def select(
        self,
        table: str,
        filters: Optional[Mapping[str, Any]] = None,
        order: Optional[str] = None,
        ascending: bool = True,
        limit: Optional[int] = None,
        single: bool = False,
    ) -> Union[list[Row], Row]:
        """
        Read rows from a table.

        Args:
            table: Table name.
            filters: Column -> value equality filters.
            order: Column to order by.
            ascending: Sort direction for order.
            limit: Maximum number of rows.
            single: Return exactly one row instead of a list.

        Returns:
            A list of rows, or one row when single is set.

        Raises:
            NotFoundError: If single is set and no row matched.
            RemoteError: If the request fails.
        """
        params = {"select": "*", **self._filter_params(filters)}
        if order is not None:
            params["order"] = f"{order}.{'asc' if ascending else 'desc'}"
        if limit is not None:
            params["limit"] = str(limit)

        headers = {"Accept": SINGLE_OBJECT_MEDIA_TYPE} if single else None
        data = self._request("GET", table, params=params, headers=headers)

        if single:
            return data or {}
        return data or []

    def insert(self, table: str, rows: Union[Row, Sequence[Row]]) -> list[Row]:
        """Insert one or more rows and return them as stored."""
        return self._request(
            "POST",
            table,
            json=rows,
            headers={"Prefer": "return=representation"},
        ) or []

    def update(self, table: str, values: Row, filters: Mapping[str, Any]) -> list[Row]:
        """Update matching rows and return them as stored."""
        if not filters:
            raise ValueError("update requires at least one filter")
        return self._request(
            "PATCH",
            table,
            params=self._filter_params(filters),
            json=values,
            headers={"Prefer": "return=representation"},
        ) or []

    def upsert(self, table: str, row: Row, on_conflict: str = "id") -> list[Row]:
        """Insert a row or merge it into the row with the same key."""
        return self._request(
            "POST",
            table,
            params={"on_conflict": on_conflict},
            json=row,
            headers={"Prefer": "resolution=merge-duplicates,return=representation"},
        ) or []

    def delete(self, table: str, filters: Mapping[str, Any]) -> None:
        """Delete matching rows."""
        if not filters:
            raise ValueError("delete requires at least one filter")
        self._request("DELETE", table, params=self._filter_params(filters))

    def close(self) -> None:
        """Close the HTTP session."""
        self._session.close()
