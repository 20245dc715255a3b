"""Error taxonomy for the badge pipeline."""

from __future__ import annotations


class LeaderboardError(Exception):
    """Base class for expected pipeline failures."""


class UpstreamListError(LeaderboardError):
    """The organization's repository list could not be fetched.

    ``status_code`` is the upstream status to forward to the caller, or 404
    when the upstream answered with something other than a list.
    """

    def __init__(self, org: str, status_code: int, reason: str = "") -> None:
        self.org = org
        self.status_code = status_code
        self.reason = reason
        super().__init__(
            f"Could not list repositories for '{org}' ({status_code}){': ' + reason if reason else ''}"
        )


class UpstreamItemError(LeaderboardError):
    """A single repository's contributor list could not be fetched."""

    def __init__(self, repo: str, reason: str) -> None:
        self.repo = repo
        self.reason = reason
        super().__init__(f"{repo}: {reason}")
