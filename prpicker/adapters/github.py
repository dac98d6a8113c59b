"""GitHub API adapter."""

import logging
from typing import Any, Dict

import requests

from prpicker.adapters.base import AuthError, FetchError, GitPlatformAdapter, SearchResult
from prpicker.models import DEFAULT_API_URL

MAX_PER_PAGE = 100
AUTH_REJECTED_CODES = (401, 403)

log = logging.getLogger("prpicker.adapters.github")


class GitHubAdapter(GitPlatformAdapter):
    """GitHub API implementation."""

    def __init__(self, token: str | None, api_url: str = DEFAULT_API_URL) -> None:
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._session = requests.Session()
        if token:
            self._session.headers["Authorization"] = f"Bearer {token}"
        self._session.headers["Accept"] = "application/vnd.github+json"
        self._session.headers["X-GitHub-Api-Version"] = "2022-11-28"

    @property
    def api_url(self) -> str:
        return self._api_url

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] | None = None,
    ) -> requests.Response:
        url = f"{self._api_url}{path}" if path.startswith("/") else f"{self._api_url}/{path}"
        try:
            resp = self._session.request(method, url, params=params, timeout=30)
        except requests.RequestException as e:
            raise FetchError(f"{method} {path}: {e}") from e
        if resp.status_code >= 400:
            msg = resp.text or resp.reason or str(resp.status_code)
            try:
                msg = resp.json().get("message", msg)
            except Exception:
                pass
            raise FetchError(f"{resp.status_code}: {msg}", status_code=resp.status_code)
        return resp

    def get_authenticated_user(self) -> str:
        if not self._token:
            raise AuthError("Missing GITHUB_TOKEN in environment variables")
        try:
            resp = self._request("GET", "/user")
        except FetchError as e:
            # Outages and server errors stay FetchError; only a rejected token is AuthError.
            if e.status_code in AUTH_REJECTED_CODES:
                raise AuthError(f"Authentication failed: {e}") from e
            raise
        try:
            login = (resp.json() or {}).get("login")
        except ValueError as e:
            raise FetchError(f"Invalid JSON in /user response: {e}") from e
        if not isinstance(login, str) or not login:
            raise AuthError("Authentication failed: response has no login")
        log.debug("Authenticated as %s", login)
        return login

    def search_pull_requests(self, query: str, per_page: int = MAX_PER_PAGE) -> SearchResult:
        per_page = max(1, min(per_page, MAX_PER_PAGE))
        resp = self._request("GET", "/search/issues", params={"q": query, "per_page": per_page})
        try:
            data = resp.json() or {}
        except ValueError as e:
            raise FetchError(f"Invalid JSON in search response: {e}") from e
        items = data.get("items") or []
        total = data.get("total_count")
        if not isinstance(total, int):
            total = len(items)
        log.debug("Search %r returned %s of %s items", query, len(items), total)
        return SearchResult(
            total_count=total,
            items=[item for item in items if isinstance(item, dict)],
        )
