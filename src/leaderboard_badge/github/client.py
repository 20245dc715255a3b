"""GitHub REST API client."""

from __future__ import annotations

import asyncio
import logging
from typing import Any
from urllib.parse import quote

import httpx

from .. import __version__
from ..config import DEFAULT_API_URL, DEFAULT_CONCURRENCY, DEFAULT_TIMEOUT
from ..errors import UpstreamItemError, UpstreamListError
from ..models import RepositoryRef

logger = logging.getLogger(__name__)

USER_AGENT = f"leaderboard-badge/{__version__}"


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


class GitHubClient:
    """Async, unauthenticated GitHub REST API client.

    Only the upstream's default page is requested for every listing, so
    organizations or repositories larger than one page are under-counted.
    """

    def __init__(
        self,
        concurrency: int = DEFAULT_CONCURRENCY,
        timeout: float = DEFAULT_TIMEOUT,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
            "X-GitHub-Api-Version": "2022-11-28",
        }
        self._client = httpx.AsyncClient(
            base_url=base_url or DEFAULT_API_URL,
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        self._semaphore = asyncio.Semaphore(max(1, concurrency))

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()

    async def _get(
        self, url: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        async with self._semaphore:
            response = await self._client.get(url, params=params)
            logger.debug("GET %s -> %d", url, response.status_code)
            response.raise_for_status()
            return response

    async def list_repos(self, org: str) -> list[RepositoryRef]:
        """List the repositories of an organization (first page only)."""
        try:
            response = await self._get(f"/orgs/{quote(org, safe='')}/repos")
        except httpx.HTTPStatusError as exc:
            raise UpstreamListError(org, exc.response.status_code) from exc

        data = _decode(response)
        if not isinstance(data, list):
            raise UpstreamListError(org, 404, "repository list is not an array")
        return [
            RepositoryRef(name=item["name"])
            for item in data
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        ]

    async def list_contributors(self, owner: str, repo: str) -> list[dict[str, Any]]:
        """List contributors of a repository with their contribution counts."""
        url = f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}/contributors"
        try:
            response = await self._get(url)
        except httpx.HTTPStatusError as exc:
            raise UpstreamItemError(repo, f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise UpstreamItemError(repo, str(exc) or type(exc).__name__) from exc

        data = _decode(response)
        if not isinstance(data, list):
            raise UpstreamItemError(repo, "contributor list is not an array")
        return [item for item in data if isinstance(item, dict)]
