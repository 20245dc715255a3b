"""Ranking of the contributor ledger."""

from __future__ import annotations

from .models import AggregateState, BadgeSummary, LeaderboardEntry

LEADERBOARD_SIZE = 5


def build_leaderboard(
    state: AggregateState, size: int = LEADERBOARD_SIZE
) -> list[LeaderboardEntry]:
    """Return the top ``size`` contributors by commits.

    ``sorted`` is stable, so contributors with equal commits keep the order
    in which they were first seen.
    """
    ranked = sorted(state.contributors.values(), key=lambda c: c.commits, reverse=True)
    total = state.total_commits
    return [
        LeaderboardEntry(
            rank=i,
            record=record,
            share=record.commits / total if total else 0.0,
        )
        for i, record in enumerate(ranked[:size], 1)
    ]


def max_commits(entries: list[LeaderboardEntry]) -> int:
    """Commit count that maps to a full bar, never below 1."""
    if not entries:
        return 1
    return max(1, entries[0].commits)


def summarize(
    org: str, state: AggregateState, entries: list[LeaderboardEntry]
) -> BadgeSummary:
    return BadgeSummary(
        org=org,
        repo_count=state.repo_count,
        contributor_count=state.total_contributors,
        total_commits=state.total_commits,
        top_share=entries[0].share if entries else 0.0,
    )
