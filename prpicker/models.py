"""Pull request record and normalization of raw search results."""

from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, ValidationError

DEFAULT_API_URL = "https://api.github.com"
STATES = ("open", "closed")


class MalformedRecord(ValueError):
    """Raised when a search item lacks a required field or has a wrong type."""

    pass


class PullRequest(BaseModel):
    """Pull request as returned by the issues search, normalized.

    Instances are frozen; display fields are computed on access.
    """

    model_config = ConfigDict(frozen=True)

    number: int
    title: str
    body: str = ""
    html_url: str
    repository: str
    state: Literal["open", "closed"]
    draft: bool = False
    created_at: AwareDatetime
    updated_at: AwareDatetime

    @property
    def identifier(self) -> str:
        """Canonical id, e.g. owner/repo#12."""
        return f"{self.repository}#{self.number}"

    @property
    def display_repository(self) -> str:
        return self.repository

    @property
    def status_label(self) -> str:
        """CLOSED overrides DRAFT overrides OPEN."""
        if self.state == "closed":
            return "CLOSED"
        if self.draft:
            return "DRAFT"
        return "OPEN"


def _text(value: str) -> str:
    """Replace lone surrogates (from JSON escapes) so the text encodes as UTF-8."""
    return value.encode("utf-8", "replace").decode("utf-8")


def repository_from_url(url: str, api_url: str = DEFAULT_API_URL) -> str:
    """Derive owner/name from a repository API URL.

    Strips the "{api_url}/repos/" prefix; for any other host falls back
    to the last two path segments so unexpected URLs still yield a name.
    """
    prefix = f"{api_url.rstrip('/')}/repos/"
    if url.startswith(prefix):
        return url[len(prefix) :].strip("/")
    parts = [p for p in url.rstrip("/").split("/") if p]
    return "/".join(parts[-2:])


def normalize(raw: Any, api_url: str = DEFAULT_API_URL) -> PullRequest:
    """Build a PullRequest from one search item.

    Raises:
        MalformedRecord: number, title, repository_url or state is
            missing or has the wrong type, or no usable timestamp.
    """
    if not isinstance(raw, dict):
        raise MalformedRecord(f"search item is not an object: {type(raw).__name__}")

    number = raw.get("number")
    if isinstance(number, bool) or not isinstance(number, int):
        raise MalformedRecord(f"invalid number: {number!r}")
    title = raw.get("title")
    if not isinstance(title, str):
        raise MalformedRecord(f"#{number}: invalid title: {title!r}")
    repository_url = raw.get("repository_url")
    if not isinstance(repository_url, str) or not repository_url:
        raise MalformedRecord(f"#{number}: invalid repository_url: {repository_url!r}")
    state = raw.get("state")
    if state not in STATES:
        raise MalformedRecord(f"#{number}: invalid state: {state!r}")

    created_at = raw.get("created_at") or raw.get("updated_at")
    updated_at = raw.get("updated_at") or created_at
    if updated_at is None:
        raise MalformedRecord(f"#{number}: no created_at/updated_at")

    repository = repository_from_url(repository_url, api_url)
    body = raw.get("body")
    try:
        return PullRequest(
            number=number,
            title=_text(title),
            body=_text(body) if isinstance(body, str) else "",
            html_url=raw.get("html_url") or f"https://github.com/{repository}/pull/{number}",
            repository=repository,
            state=state,
            draft=raw.get("draft") or False,
            created_at=created_at,
            updated_at=updated_at,
        )
    except ValidationError as e:
        fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err.get("loc"))
        raise MalformedRecord(f"#{number}: invalid field(s): {fields}") from e
