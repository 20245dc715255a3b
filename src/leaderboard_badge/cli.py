"""CLI entrypoint for leaderboard-badge."""

from __future__ import annotations

import asyncio
import logging
import sys

import click
import httpx
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import (
    DEFAULT_API_URL,
    DEFAULT_CACHE_MAX_AGE,
    DEFAULT_CONCURRENCY,
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    Settings,
)
from .errors import UpstreamListError
from .orchestrator import BadgeResult
from .renderer import share_label


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _upstream_options(func):
    func = click.option(
        "--api-url",
        envvar="LEADERBOARD_API_URL",
        default=DEFAULT_API_URL,
        show_default=True,
        help="GitHub (Enterprise) API base URL",
    )(func)
    func = click.option(
        "--timeout",
        envvar="LEADERBOARD_TIMEOUT",
        type=click.FloatRange(min=0.1),
        default=DEFAULT_TIMEOUT,
        show_default=True,
        help="Timeout in seconds for each upstream request",
    )(func)
    func = click.option(
        "--concurrency",
        envvar="LEADERBOARD_CONCURRENCY",
        type=click.IntRange(min=1),
        default=DEFAULT_CONCURRENCY,
        show_default=True,
        help="Maximum simultaneous upstream requests (1 = sequential)",
    )(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable debug logging")
@click.version_option(version=__version__)
def main(verbose: bool) -> None:
    """Render a top-contributors SVG badge for a GitHub organization."""
    _setup_logging(verbose)


@main.command()
@click.option("--host", envvar="HOST", default=DEFAULT_HOST, show_default=True)
@click.option("--port", envvar="PORT", type=int, default=DEFAULT_PORT, show_default=True)
@click.option(
    "--cache-max-age",
    envvar="LEADERBOARD_CACHE_MAX_AGE",
    type=click.IntRange(min=0),
    default=DEFAULT_CACHE_MAX_AGE,
    show_default=True,
    help="max-age advertised in the Cache-Control header",
)
@_upstream_options
def serve(
    host: str,
    port: int,
    cache_max_age: int,
    api_url: str,
    timeout: float,
    concurrency: int,
) -> None:
    """Serve GET /leaderboard-badge?org=<org>."""
    import uvicorn

    from .server import create_app

    settings = Settings(
        api_url=api_url,
        timeout=timeout,
        concurrency=concurrency,
        cache_max_age=cache_max_age,
        host=host,
        port=port,
    )
    uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


def _print_summary(console: Console, result: BadgeResult) -> None:
    summary = result.summary
    console.print(
        f"[bold]{summary.org}[/bold]: {summary.repo_count} repositories, "
        f"{summary.contributor_count} contributors, {summary.total_commits:,} commits"
    )
    if result.state.skipped_repos:
        console.print(
            f"[bold yellow]Warning:[/bold yellow] Skipped "
            f"{len(result.state.skipped_repos)} repo(s): "
            f"{', '.join(result.state.skipped_repos)}"
        )
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Username")
    table.add_column("Commits", justify="right")
    table.add_column("Share", justify="right")
    for entry in result.entries:
        table.add_row(
            str(entry.rank), entry.login, f"{entry.commits:,}", share_label(entry.share)
        )
    console.print(table)


@main.command()
@click.argument("org")
@click.option(
    "--output",
    "output_file",
    default=None,
    type=click.Path(dir_okay=False, writable=True),
    help="Save the SVG to a file instead of stdout",
)
@_upstream_options
def render(
    org: str,
    output_file: str | None,
    api_url: str,
    timeout: float,
    concurrency: int,
) -> None:
    """Build the badge for ORG once."""
    from .orchestrator import run

    settings = Settings(api_url=api_url, timeout=timeout, concurrency=concurrency)
    console = Console(stderr=True)
    try:
        with console.status(f"Collecting contributors for {org}..."):
            result = asyncio.run(run(org, settings))
    except UpstreamListError as exc:
        if exc.status_code == 404:
            click.echo(f"Error: organization '{org}' not found.", err=True)
        else:
            click.echo(f"Error: GitHub API returned {exc.status_code}.", err=True)
        sys.exit(1)
    except (httpx.ConnectError, httpx.TimeoutException) as exc:
        click.echo(f"Error: Could not connect to GitHub API. {exc}", err=True)
        sys.exit(1)

    if result.is_empty:
        click.echo(f"No contributor data found for {org}", err=True)
        return

    _print_summary(console, result)
    if output_file:
        with open(output_file, "w", encoding="utf-8") as f:
            f.write(result.svg)
        console.print(f"Saved to {output_file}")
    else:
        click.echo(result.svg, nl=False)


if __name__ == "__main__":  # pragma: no cover
    main()
