"""Find the GitHub owner/name of the repository in the working directory.

Reads the origin remote URL with git and accepts both SSH
(git@github.com:owner/repo.git) and HTTPS (https://github.com/owner/repo)
forms.
"""

import logging
import subprocess
from pathlib import Path


class GitRemoteError(Exception):
    """Raised when the current repository cannot be resolved to owner/name."""

    pass


def _run_git(args: list[str], cwd: Path, log: logging.Logger | None = None) -> str:
    """Run git command and return stdout; raise GitRemoteError on non-zero exit."""
    cmd = ["git"] + args
    try:
        result = subprocess.run(cmd, cwd=cwd, check=True, capture_output=True, text=True, timeout=60)
    except subprocess.CalledProcessError as e:
        err = (e.stderr or e.stdout or "").strip()
        if log:
            log.debug("Git %s failed: %s", args, err)
        raise GitRemoteError(f"git {' '.join(args)}: {err}") from e
    except FileNotFoundError as e:
        raise GitRemoteError("git not found") from e
    return result.stdout.strip()


def parse_github_remote(url: str) -> str:
    """Return owner/name from a GitHub remote URL.

    Raises:
        GitRemoteError: URL is not a GitHub URL or has no owner/name.
    """
    if "github.com:" in url:
        path = url.split("github.com:", 1)[1]
    elif "github.com/" in url:
        path = url.split("github.com/", 1)[1]
    else:
        raise GitRemoteError(f"Not a GitHub repository URL: {url}")
    path = path.strip().rstrip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    parts = path.split("/")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise GitRemoteError(f"Invalid GitHub repository format: {path}")
    return f"{parts[0]}/{parts[1]}"


def current_repository(
    repo_dir: Path | None = None,
    remote: str = "origin",
    log: logging.Logger | None = None,
) -> str:
    """Return owner/name for the repository containing repo_dir (default cwd)."""
    cwd = Path(repo_dir) if repo_dir is not None else Path.cwd()
    try:
        url = _run_git(["remote", "get-url", remote], cwd=cwd, log=log)
    except GitRemoteError as e:
        raise GitRemoteError(f"Not in a git repository or no '{remote}' remote ({e})") from e
    repository = parse_github_remote(url)
    if log:
        log.debug("Current repository: %s", repository)
    return repository
