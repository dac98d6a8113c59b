"""Browse pipeline: authenticate, fetch, rank, preview, choose, resolve.

Stages run in order with no retries. Malformed search items are logged
and skipped; any other error aborts the run. The preview directory is
removed on every exit path once it has been created.
"""

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, TextIO

from prpicker.adapters.base import GitPlatformAdapter
from prpicker.adapters.github import MAX_PER_PAGE
from prpicker.chooser import FzfChooser
from prpicker.models import DEFAULT_API_URL, MalformedRecord, PullRequest, normalize
from prpicker.preview import PreviewMaterializer
from prpicker.ranking import rank

log = logging.getLogger("prpicker.pipeline")


@dataclass
class BrowseOptions:
    """Per-run settings passed in by the caller.

    repository is owner/name to restrict the search to, or None for all
    repositories.
    """

    repository: str | None = None
    color: bool = True
    per_page: int = MAX_PER_PAGE
    api_url: str = DEFAULT_API_URL


@dataclass
class BrowseResult:
    login: str
    total_count: int = 0
    records: List[PullRequest] = field(default_factory=list)
    selected: PullRequest | None = None


def build_query(login: str, repository: str | None = None) -> str:
    query = f"author:{login} is:pr"
    if repository:
        query += f" repo:{repository}"
    return query


def normalize_all(items: List[Any], api_url: str = DEFAULT_API_URL) -> List[PullRequest]:
    """Normalize search items, skipping (and logging) malformed ones."""
    records: List[PullRequest] = []
    for raw in items:
        try:
            records.append(normalize(raw, api_url))
        except MalformedRecord as e:
            log.warning("Skipping malformed search item: %s", e)
    return records


class PullRequestBrowser:
    """Runs one browse session against an adapter and a chooser."""

    def __init__(
        self,
        adapter: GitPlatformAdapter,
        chooser: FzfChooser,
        options: BrowseOptions | None = None,
        now: datetime | None = None,
    ) -> None:
        self.adapter = adapter
        self.chooser = chooser
        self.options = options or BrowseOptions()
        self.now = now

    def run(self) -> BrowseResult:
        """Run all stages; selected is None when nothing was found or chosen.

        Raises:
            AuthError, FetchError, MaterializationError, ChooserError.
        """
        login = self.adapter.get_authenticated_user()
        log.info("Authenticated as: %s", login)

        query = build_query(login, self.options.repository)
        search = self.adapter.search_pull_requests(query, per_page=self.options.per_page)
        log.info("Found %s pull requests", search.total_count)

        records = rank(normalize_all(search.items, self.options.api_url))
        result = BrowseResult(login=login, total_count=search.total_count, records=records)
        if not records:
            return result

        with PreviewMaterializer(color=self.options.color, now=self.now) as materializer:
            lines, index = materializer.materialize(records)
            path = self.chooser.select(lines)
            result.selected = index.resolve(path)
            if path is not None and result.selected is None:
                log.warning("Chooser returned unknown preview path %r", path)
        return result


def report(result: BrowseResult, out: TextIO | None = None) -> None:
    """Print the selected PR title and URL, or a no-selection notice."""
    out = out or sys.stdout
    if not result.records:
        print("No pull requests found.", file=out)
        return
    if result.selected is None:
        print("No PR selected.", file=out)
        return
    print("\nSelected PR:", file=out)
    print(f"Title: {result.selected.title}", file=out)
    print(f"URL  : {result.selected.html_url}", file=out)
