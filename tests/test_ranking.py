"""Tests for pull request ordering (status priority, then recency)."""

import itertools
from datetime import UTC, datetime, timedelta

from prpicker.models import PullRequest
from prpicker.ranking import (
    PRIORITY_CLOSED,
    PRIORITY_DRAFT,
    PRIORITY_OPEN,
    compare,
    rank,
    status_priority,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


def _pr(number: int, state: str = "open", draft: bool = False, age: timedelta = timedelta(hours=1)) -> PullRequest:
    return PullRequest(
        number=number,
        title=f"PR {number}",
        html_url=f"https://github.com/o/r/pull/{number}",
        repository="o/r",
        state=state,
        draft=draft,
        created_at=NOW - age - timedelta(days=1),
        updated_at=NOW - age,
    )


def test_status_priority() -> None:
    assert status_priority(_pr(1, draft=True)) == PRIORITY_DRAFT
    assert status_priority(_pr(2)) == PRIORITY_OPEN
    assert status_priority(_pr(3, state="closed")) == PRIORITY_CLOSED


def test_closed_draft_ranks_as_closed() -> None:
    """A PR that is both closed and draft sorts with the closed ones."""
    assert status_priority(_pr(1, state="closed", draft=True)) == PRIORITY_CLOSED


def test_rank_draft_then_open_then_closed() -> None:
    """Status beats recency: draft (1h), open (2h), closed (5m)."""
    draft = _pr(1, draft=True, age=timedelta(hours=1))
    opened = _pr(2, age=timedelta(hours=2))
    closed = _pr(3, state="closed", age=timedelta(minutes=5))
    assert rank([closed, opened, draft]) == [draft, opened, closed]


def test_rank_most_recent_first_within_status() -> None:
    old = _pr(1, age=timedelta(days=3))
    new = _pr(2, age=timedelta(minutes=1))
    mid = _pr(3, age=timedelta(hours=5))
    assert [pr.number for pr in rank([old, new, mid])] == [2, 3, 1]


def test_rank_ties_keep_fetch_order() -> None:
    a = _pr(1)
    b = _pr(2)
    c = _pr(3)
    assert [pr.number for pr in rank([b, c, a])] == [2, 3, 1]


def test_rank_does_not_mutate_input() -> None:
    records = [_pr(1, state="closed"), _pr(2, draft=True)]
    original = list(records)
    rank(records)
    assert records == original


def _sample() -> list[PullRequest]:
    states = [("open", False), ("open", True), ("closed", False), ("closed", True)]
    ages = [timedelta(minutes=5), timedelta(hours=3), timedelta(hours=3), timedelta(days=9)]
    return [
        _pr(n, state=state, draft=draft, age=age)
        for n, ((state, draft), age) in enumerate(itertools.product(states, ages))
    ]


def test_compare_is_antisymmetric_and_reflexive() -> None:
    records = _sample()
    for a in records:
        assert compare(a, a) == 0
        for b in records:
            assert compare(a, b) == -compare(b, a)


def test_compare_is_transitive() -> None:
    records = _sample()
    for a, b, c in itertools.product(records, repeat=3):
        if compare(a, b) <= 0 and compare(b, c) <= 0:
            assert compare(a, c) <= 0


def test_compare_matches_rank_order() -> None:
    ranked = rank(_sample())
    for earlier, later in zip(ranked, ranked[1:]):
        assert compare(earlier, later) <= 0
