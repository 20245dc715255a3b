"""Tests for leaderboard ranking."""

from __future__ import annotations

from leaderboard_badge.aggregator import ContributorLedger
from leaderboard_badge.leaderboard import build_leaderboard, max_commits, summarize
from leaderboard_badge.models import AggregateState


def _state(*repos: list[tuple[str, int]], repo_count: int | None = None) -> AggregateState:
    ledger = ContributorLedger()
    for repo in repos:
        ledger.add_repository({"login": login, "contributions": n} for login, n in repo)
    return AggregateState(
        contributors=ledger.records,
        total_commits=ledger.total_commits,
        repo_count=len(repos) if repo_count is None else repo_count,
    )


def test_acme_leaderboard():
    state = _state([("x", 10), ("y", 5)], [("x", 3)])
    entries = build_leaderboard(state)

    assert [(e.rank, e.login, e.commits) for e in entries] == [(1, "x", 13), (2, "y", 5)]
    assert round(entries[0].share * 100, 1) == 72.2
    assert round(entries[1].share * 100, 1) == 27.8


def test_leaderboard_truncates_to_five():
    state = _state([(f"user{i}", i) for i in range(1, 9)])
    entries = build_leaderboard(state)

    assert len(entries) == 5
    assert [e.login for e in entries] == ["user8", "user7", "user6", "user5", "user4"]
    assert [e.rank for e in entries] == [1, 2, 3, 4, 5]


def test_leaderboard_shorter_than_five():
    state = _state([("a", 1), ("b", 2)])
    assert len(build_leaderboard(state)) == 2


def test_leaderboard_sorted_non_increasing():
    state = _state([("a", 3), ("b", 9), ("c", 3), ("d", 12), ("e", 0), ("f", 7)])
    commits = [e.commits for e in build_leaderboard(state)]
    assert commits == sorted(commits, reverse=True)


def test_ties_keep_encounter_order():
    state = _state([("late", 1), ("b", 5)], [("a", 5), ("c", 5)])
    # b is seen before a and c; late is seen first but ranks lower
    assert [e.login for e in build_leaderboard(state)] == ["b", "a", "c", "late"]


def test_ties_across_repositories_follow_repo_order():
    first = build_leaderboard(_state([("p", 4)], [("q", 4)]))
    second = build_leaderboard(_state([("q", 4)], [("p", 4)]))
    assert [e.login for e in first] == ["p", "q"]
    assert [e.login for e in second] == ["q", "p"]


def test_empty_ledger():
    assert build_leaderboard(AggregateState()) == []


def test_zero_total_commits_share():
    state = _state([("a", 0), ("b", 0)])
    entries = build_leaderboard(state)
    assert [e.share for e in entries] == [0.0, 0.0]
    assert max_commits(entries) == 1


def test_max_commits():
    entries = build_leaderboard(_state([("a", 40), ("b", 2)]))
    assert max_commits(entries) == 40
    assert max_commits([]) == 1


def test_summarize():
    state = _state([("x", 10), ("y", 5)], [("x", 3)], repo_count=3)
    entries = build_leaderboard(state)
    summary = summarize("acme", state, entries)

    assert summary.org == "acme"
    assert summary.repo_count == 3
    assert summary.contributor_count == 2
    assert summary.total_commits == 18
    assert summary.top_share == entries[0].share
