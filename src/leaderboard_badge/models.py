"""Data models for leaderboard-badge."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RepositoryRef:
    name: str


@dataclass
class ContributorRecord:
    login: str
    commits: int
    avatar_url: str


@dataclass
class AggregateState:
    """Organization-wide ledger built for a single request."""

    contributors: dict[str, ContributorRecord] = field(default_factory=dict)
    total_commits: int = 0
    repo_count: int = 0
    # Repositories whose contributor list could not be fetched
    skipped_repos: list[str] = field(default_factory=list)

    @property
    def total_contributors(self) -> int:
        return len(self.contributors)


@dataclass
class LeaderboardEntry:
    rank: int
    record: ContributorRecord
    share: float

    @property
    def login(self) -> str:
        return self.record.login

    @property
    def commits(self) -> int:
        return self.record.commits

    @property
    def avatar_url(self) -> str:
        return self.record.avatar_url


@dataclass
class BadgeSummary:
    """Scalars shown on the metric cards."""

    org: str
    repo_count: int
    contributor_count: int
    total_commits: int
    top_share: float
