"""Unit tests for GitHub adapter (mocked API)."""

from unittest.mock import Mock, patch

import pytest
import requests

from prpicker.adapters.base import AuthError, FetchError, SearchResult
from prpicker.adapters.github import GitHubAdapter


@pytest.fixture
def adapter() -> GitHubAdapter:
    return GitHubAdapter(token="test-token", api_url="https://api.github.com")


def _response(status_code: int = 200, data=None, text: str = "") -> Mock:
    resp = Mock()
    resp.status_code = status_code
    resp.text = text
    resp.reason = ""
    resp.json.return_value = data
    return resp


def test_session_sends_bearer_token(adapter: GitHubAdapter) -> None:
    assert adapter._session.headers["Authorization"] == "Bearer test-token"
    assert adapter._session.headers["Accept"] == "application/vnd.github+json"


def test_get_authenticated_user_success(adapter: GitHubAdapter) -> None:
    """get_authenticated_user returns the login from GET /user."""
    with patch.object(adapter._session, "request", return_value=_response(200, {"login": "octocat"})) as req:
        login = adapter.get_authenticated_user()

    assert login == "octocat"
    assert req.call_args[0][0] == "GET"
    assert req.call_args[0][1] == "https://api.github.com/user"


def test_get_authenticated_user_without_token_raises() -> None:
    """No token: AuthError without any request."""
    adapter = GitHubAdapter(token=None)
    assert "Authorization" not in adapter._session.headers
    with patch.object(adapter._session, "request") as req:
        with pytest.raises(AuthError, match="GITHUB_TOKEN"):
            adapter.get_authenticated_user()
    req.assert_not_called()


def test_get_authenticated_user_rejected_token_raises(adapter: GitHubAdapter) -> None:
    resp = _response(401, {"message": "Bad credentials"}, text="Unauthorized")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(AuthError) as exc_info:
            adapter.get_authenticated_user()
    assert "401" in str(exc_info.value)
    assert "Bad credentials" in str(exc_info.value)


def test_get_authenticated_user_forbidden_raises_auth_error(adapter: GitHubAdapter) -> None:
    resp = _response(403, {"message": "Resource not accessible"}, text="Forbidden")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(AuthError, match="403"):
            adapter.get_authenticated_user()


def test_get_authenticated_user_server_error_is_fetch_error(adapter: GitHubAdapter) -> None:
    resp = _response(500, {"message": "Server Error"}, text="Server Error")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(FetchError) as exc_info:
            adapter.get_authenticated_user()
    assert not isinstance(exc_info.value, AuthError)
    assert exc_info.value.status_code == 500


def test_get_authenticated_user_transport_error_is_fetch_error(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "request", side_effect=requests.ConnectionError("offline")):
        with pytest.raises(FetchError, match="offline") as exc_info:
            adapter.get_authenticated_user()
    assert not isinstance(exc_info.value, AuthError)
    assert exc_info.value.status_code is None


def test_get_authenticated_user_missing_login_raises(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "request", return_value=_response(200, {})):
        with pytest.raises(AuthError):
            adapter.get_authenticated_user()


def test_search_pull_requests_success(adapter: GitHubAdapter) -> None:
    """search_pull_requests sends q and per_page and returns raw items."""
    data = {
        "total_count": 2,
        "items": [{"number": 1, "title": "A"}, {"number": 2, "title": "B"}],
    }
    with patch.object(adapter._session, "request", return_value=_response(200, data)) as req:
        result = adapter.search_pull_requests("author:octocat is:pr", per_page=100)

    assert isinstance(result, SearchResult)
    assert result.total_count == 2
    assert [item["number"] for item in result.items] == [1, 2]
    call_args = req.call_args
    assert call_args[0][0] == "GET"
    assert call_args[0][1] == "https://api.github.com/search/issues"
    assert call_args[1]["params"] == {"q": "author:octocat is:pr", "per_page": 100}


def test_search_pull_requests_caps_page_size(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "request", return_value=_response(200, {"items": []})) as req:
        adapter.search_pull_requests("q", per_page=500)
    assert req.call_args[1]["params"]["per_page"] == 100


def test_search_pull_requests_empty(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "request", return_value=_response(200, {"total_count": 0, "items": []})):
        result = adapter.search_pull_requests("q")
    assert result.total_count == 0
    assert result.items == []


def test_search_pull_requests_drops_non_object_items(adapter: GitHubAdapter) -> None:
    data = {"total_count": 2, "items": [{"number": 1}, "junk"]}
    with patch.object(adapter._session, "request", return_value=_response(200, data)):
        result = adapter.search_pull_requests("q")
    assert result.items == [{"number": 1}]


def test_search_pull_requests_api_error_raises(adapter: GitHubAdapter) -> None:
    resp = _response(422, {"message": "Validation Failed"}, text="Unprocessable")
    with patch.object(adapter._session, "request", return_value=resp):
        with pytest.raises(FetchError, match="Validation Failed"):
            adapter.search_pull_requests("q")


def test_search_pull_requests_transport_error_raises(adapter: GitHubAdapter) -> None:
    with patch.object(adapter._session, "request", side_effect=requests.ConnectionError("offline")):
        with pytest.raises(FetchError, match="offline"):
            adapter.search_pull_requests("q")


def test_api_url_trailing_slash_stripped() -> None:
    adapter = GitHubAdapter(token="t", api_url="https://ghe.example.com/api/v3/")
    assert adapter.api_url == "https://ghe.example.com/api/v3"
