from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import httpx

from .observability import log_event

DEFAULT_API_URL = "https://api.zenhub.io/p1"

JSONValue = Any


class ZenHubError(Exception):
    """Base error for client failures; `body` is the best-effort response body."""

    def __init__(self, message: str, *, body: JSONValue = None):
        super().__init__(message)
        self.body = body if body is not None else {}


class ZenHubTransportError(ZenHubError):
    def __init__(self, message: str, *, method: str, path: str):
        super().__init__(message)
        self.method = method
        self.path = path


class ZenHubStatusError(ZenHubError):
    """The request went through but the envelope carries a non-OK `status`."""

    def __init__(self, message: str, *, status: Any, body: Dict[str, Any]):
        super().__init__(message, body=body)
        self.status = status


class ZenHubClient:
    """
    Async client for the ZenHub REST API.
    - Attaches the access token as a query parameter on every request
    - One endpoint coroutine per remote call, one HTTP request each
    - No retries, pagination, caching or payload validation

    TLS verification is always on for the client built here. An injected
    `http` client is used as-is: its `verify` setting is the caller's, so
    pass one that keeps certificate validation enabled.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout_seconds: Optional[float] = None,
        check_status_on_writes: bool = False,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        if not token:
            raise ValueError("token must be provided.")

        self._token = token
        self.base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self.check_status_on_writes = check_status_on_writes
        self.log = logger or logging.getLogger("zenhub_client.client")

        client_kwargs: Dict[str, Any] = {
            "headers": {"Accept": "application/json"},
            "verify": True,
        }
        if timeout_seconds is not None:
            client_kwargs["timeout"] = timeout_seconds

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(**client_kwargs)

    @classmethod
    def from_env(cls, **kwargs) -> "ZenHubClient":
        from .config import create_client_from_env

        return create_client_from_env(**kwargs)

    @property
    def token(self) -> str:
        return self._token

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ZenHubClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def _params(self, params: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        merged = dict(params or {})
        merged["access_token"] = self._token
        return merged

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path}"

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: JSONValue = None,
        check_status: bool = True,
    ) -> JSONValue:
        """
        Core request method.
        - Raises ZenHubTransportError when httpx fails (connect, TLS, timeout)
        - Raises ZenHubStatusError when check_status is set and the body
          carries a non-OK `status`
        - Returns the decoded body, {} when empty or not JSON
        """
        method = method.upper()
        start = time.perf_counter()
        kwargs: Dict[str, Any] = {"params": self._params(params)}
        if method in ("POST", "PUT"):
            kwargs["json"] = json

        try:
            resp = await self.http.request(method, self._url(path), **kwargs)
        except httpx.HTTPError as exc:
            log_event(
                "zenhub_call",
                method=method,
                endpoint=path,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise ZenHubTransportError(
                f"Transport error calling {method} {path}: {exc}",
                method=method,
                path=path,
            ) from exc

        log_event(
            "zenhub_call",
            method=method,
            endpoint=path,
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        body = self._safe_json(resp, method=method, path=path)
        if check_status:
            self._raise_for_envelope(body)
        return body

    def _safe_json(self, resp: httpx.Response, *, method: str, path: str) -> JSONValue:
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError:
            self.log.warning(
                "Non-JSON body from %s %s: %r",
                method,
                path,
                (resp.text or "")[:200],
            )
            return {}

        return {} if data is None else data

    @staticmethod
    def _raise_for_envelope(body: JSONValue) -> None:
        if not isinstance(body, dict):
            return
        status = body.get("status")
        if status and status != "OK":
            message = body.get("description") or body.get("error_message") or ""
            raise ZenHubStatusError(str(message), status=status, body=body)

    # --- Request helpers --------------------------------------------------- #

    async def _get(
        self, path: str, params: Optional[Dict[str, Any]] = None
    ) -> JSONValue:
        return await self.request("GET", path, params=params)

    async def _post(
        self, path: str, params: Optional[Dict[str, Any]], body: JSONValue
    ) -> JSONValue:
        return await self.request(
            "POST",
            path,
            params=params,
            json=body,
            check_status=self.check_status_on_writes,
        )

    async def _put(
        self, path: str, params: Optional[Dict[str, Any]], body: JSONValue
    ) -> JSONValue:
        return await self.request(
            "PUT",
            path,
            params=params,
            json=body,
            check_status=self.check_status_on_writes,
        )

    # --- Endpoints --------------------------------------------------------- #

    async def get_board(self, repo_id: int | str) -> Optional[list]:
        """
        Return the pipelines of a repository's board.

        On failure the raised error's `body` is narrowed to the same
        `pipelines` extraction, so callbacks see one shape on every path.
        """
        try:
            body = await self._get(f"repositories/{repo_id}/board")
        except ZenHubError as exc:
            exc.body = self._pipelines(exc.body)
            raise
        return self._pipelines(body)

    @staticmethod
    def _pipelines(body: JSONValue) -> Optional[list]:
        return body.get("pipelines") if isinstance(body, dict) else None

    async def get_issue(self, repo_id: int | str, issue_number: int | str) -> JSONValue:
        return await self._get(f"repositories/{repo_id}/issues/{issue_number}")

    async def get_issue_events(
        self, repo_id: int | str, issue_number: int | str
    ) -> JSONValue:
        return await self._get(f"repositories/{repo_id}/issues/{issue_number}/events")

    async def get_epics(self, repo_id: int | str) -> JSONValue:
        return await self._get(f"repositories/{repo_id}/epics")

    async def get_epic_data(self, repo_id: int | str, epic_id: int | str) -> JSONValue:
        return await self._get(f"repositories/{repo_id}/epics/{epic_id}")

    async def add_remove_issues_to_epic(
        self, repo_id: int | str, epic_id: int | str, payload: JSONValue
    ) -> JSONValue:
        """
        Add and/or remove issues on an epic.

        payload: {"add_issues": [{"repo_id": ..., "issue_number": ...}],
                  "remove_issues": [...]}
        """
        return await self._post(
            f"repositories/{repo_id}/epics/{epic_id}/update_issues", None, payload
        )

    async def convert_issue_to_epic(
        self, repo_id: int | str, issue_id: int | str, payload: JSONValue
    ) -> JSONValue:
        return await self._post(
            f"repositories/{repo_id}/issues/{issue_id}/convert_to_epic", None, payload
        )

    async def set_estimate_for_issue(
        self, repo_id: int | str, issue_id: int | str, payload: JSONValue
    ) -> JSONValue:
        return await self._put(
            f"repositories/{repo_id}/issues/{issue_id}/estimate", None, payload
        )
