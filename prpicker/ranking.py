"""Ordering of pull requests in the chooser list.

Drafts first, then open, then closed; within a status the most recently
updated comes first. A closed draft counts as closed. Equal keys keep
the order the API returned them in (sorted() is stable).
"""

from typing import Iterable, List, Tuple

from prpicker.models import PullRequest

PRIORITY_DRAFT = 0
PRIORITY_OPEN = 1
PRIORITY_CLOSED = 2
PRIORITY_OTHER = 3


def status_priority(pr: PullRequest) -> int:
    if pr.state == "closed":
        return PRIORITY_CLOSED
    if pr.draft:
        return PRIORITY_DRAFT
    if pr.state == "open":
        return PRIORITY_OPEN
    return PRIORITY_OTHER


def sort_key(pr: PullRequest) -> Tuple[int, float]:
    return status_priority(pr), -pr.updated_at.timestamp()


def compare(a: PullRequest, b: PullRequest) -> int:
    """Three-way comparison consistent with sort_key: -1, 0 (tie) or 1."""
    ka, kb = sort_key(a), sort_key(b)
    return (ka > kb) - (ka < kb)


def rank(records: Iterable[PullRequest]) -> List[PullRequest]:
    """Return a new list in display order; the input is left untouched."""
    return sorted(records, key=sort_key)
