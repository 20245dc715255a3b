"""Data aggregation: merge per-repo contributor lists into one ledger."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable
from urllib.parse import quote

from .errors import UpstreamItemError
from .github.client import GitHubClient
from .models import AggregateState, ContributorRecord

logger = logging.getLogger(__name__)


def fallback_avatar_url(login: str) -> str:
    """Avatar URL used when the upstream entry carries none."""
    return f"https://github.com/{quote(login, safe='')}.png"


def _contributions(entry: dict[str, Any]) -> int:
    value = entry.get("contributions")
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0


class ContributorLedger:
    """Organization-wide contributor totals keyed by login.

    Records keep first-sighting order, which later breaks ranking ties. The
    avatar URL of a record is fixed when the login is first seen; later
    sightings only add commits.
    """

    def __init__(self) -> None:
        self.records: dict[str, ContributorRecord] = {}
        self.total_commits = 0

    def __len__(self) -> int:
        return len(self.records)

    def add(self, login: str, contributions: int, avatar_url: str | None = None) -> None:
        record = self.records.get(login)
        if record is None:
            record = ContributorRecord(
                login=login,
                commits=0,
                avatar_url=avatar_url or fallback_avatar_url(login),
            )
            self.records[login] = record
        record.commits += contributions
        self.total_commits += contributions

    def add_repository(self, entries: Iterable[dict[str, Any]]) -> None:
        """Add one repository's contributor list as returned by the API."""
        for entry in entries:
            login = entry.get("login")
            if not isinstance(login, str) or not login:
                continue
            avatar_url = entry.get("avatar_url")
            self.add(
                login,
                _contributions(entry),
                avatar_url if isinstance(avatar_url, str) else None,
            )

    def merge(self, other: ContributorLedger) -> ContributorLedger:
        """Fold ``other`` into this ledger and return it."""
        for record in other.records.values():
            self.add(record.login, record.commits, record.avatar_url)
        return self


async def aggregate_contributors(client: GitHubClient, org: str) -> AggregateState:
    """Build the contributor ledger for every repository of ``org``.

    A failing repository list aborts the whole run. A repository whose
    contributor list cannot be fetched is skipped and the rest are merged.
    """
    repos = await client.list_repos(org)

    results = await asyncio.gather(
        *(client.list_contributors(org, r.name) for r in repos),
        return_exceptions=True,
    )

    # Every fetch has settled here; anything but a per-repo failure aborts
    for result in results:
        if isinstance(result, BaseException) and not isinstance(result, UpstreamItemError):
            raise result

    # gather keeps input order, so ties resolve by repository list order
    ledger = ContributorLedger()
    skipped: list[str] = []
    for repo, entries in zip(repos, results):
        if isinstance(entries, UpstreamItemError):
            logger.warning("Skipping %s/%s: %s", org, repo.name, entries.reason)
            skipped.append(repo.name)
            continue
        ledger.add_repository(entries)

    logger.info(
        "%s: %d repos, %d skipped, %d contributors, %d commits",
        org,
        len(repos),
        len(skipped),
        len(ledger),
        ledger.total_commits,
    )
    return AggregateState(
        contributors=ledger.records,
        total_commits=ledger.total_commits,
        repo_count=len(repos),
        skipped_repos=skipped,
    )
