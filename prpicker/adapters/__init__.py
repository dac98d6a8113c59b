"""Git platform adapters."""

from prpicker.adapters.base import AuthError, FetchError, GitPlatformAdapter, GitPlatformError, SearchResult
from prpicker.adapters.github import GitHubAdapter

__all__ = [
    "AuthError",
    "FetchError",
    "GitHubAdapter",
    "GitPlatformAdapter",
    "GitPlatformError",
    "SearchResult",
]
