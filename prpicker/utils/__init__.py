"""Shared utilities (git remote detection)."""

from prpicker.utils.git_remote import GitRemoteError, current_repository, parse_github_remote

__all__ = [
    "GitRemoteError",
    "current_repository",
    "parse_github_remote",
]
