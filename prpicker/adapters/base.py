"""Abstract base for Git platform adapters."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from pydantic import BaseModel, Field


class GitPlatformError(Exception):
    """Raised when a Git platform API call fails."""

    pass


class AuthError(GitPlatformError):
    """Raised when the API token is missing or rejected."""

    pass


class FetchError(GitPlatformError):
    """Raised when a request fails (transport or API error).

    status_code is the HTTP status, or None for transport errors.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SearchResult(BaseModel):
    """One page of search results, items kept as raw API objects."""

    total_count: int = 0
    items: List[Dict[str, Any]] = Field(default_factory=list)


class GitPlatformAdapter(ABC):
    """Abstract read-only interface for Git hosting platforms."""

    @abstractmethod
    def get_authenticated_user(self) -> str:
        """Return the login of the user owning the token."""
        ...

    @abstractmethod
    def search_pull_requests(self, query: str, per_page: int = 100) -> SearchResult:
        """Run an issues/PR search and return the first page."""
        ...
