"""Orchestrator: wires together client, aggregator, leaderboard and renderer."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

import httpx

from .aggregator import aggregate_contributors
from .config import Settings
from .github.client import GitHubClient
from .leaderboard import build_leaderboard, summarize
from .models import AggregateState, BadgeSummary, LeaderboardEntry
from .renderer import render_svg


@dataclass
class BadgeResult:
    state: AggregateState
    summary: BadgeSummary
    entries: list[LeaderboardEntry] = field(default_factory=list)
    # None when the ledger is empty
    svg: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.entries


async def build_badge(
    client: GitHubClient,
    org: str,
    generated_at: datetime | None = None,
) -> BadgeResult:
    """Main pipeline: fetch, aggregate, rank, render."""
    state = await aggregate_contributors(client, org)
    entries = build_leaderboard(state)
    summary = summarize(org, state, entries)
    if not entries:
        return BadgeResult(state=state, summary=summary)
    return BadgeResult(
        state=state,
        summary=summary,
        entries=entries,
        svg=render_svg(summary, entries, generated_at),
    )


async def run(
    org: str,
    settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
    generated_at: datetime | None = None,
) -> BadgeResult:
    """Build one badge with a client scoped to this call."""
    async with GitHubClient(
        concurrency=settings.concurrency,
        timeout=settings.timeout,
        base_url=settings.api_url,
        transport=transport,
    ) as client:
        return await build_badge(client, org, generated_at=generated_at)
