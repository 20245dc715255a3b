"""HTTP service exposing the leaderboard badge."""

from __future__ import annotations

import logging

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse, Response

from . import __version__
from .config import Settings
from .errors import UpstreamListError
from .orchestrator import run

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"
MISSING_ORG_MESSAGE = "Missing org parameter"
FAILURE_MESSAGE = "Error generating leaderboard"


def no_data_message(org: str) -> str:
    return f"No contributor data found for {org}"


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the app. ``transport`` replaces the upstream network (tests)."""
    app = FastAPI(title="Leaderboard Badge", version=__version__)
    app.state.settings = settings or Settings.from_env()
    app.state.transport = transport

    @app.get("/health")
    async def health():
        return {"status": "ok", "version": __version__}

    @app.get("/leaderboard-badge")
    async def leaderboard_badge(request: Request, org: str | None = None) -> Response:
        org = (org or "").strip()
        if not org:
            return PlainTextResponse(MISSING_ORG_MESSAGE, status_code=400)

        current: Settings = request.app.state.settings
        try:
            result = await run(org, current, transport=request.app.state.transport)
        except UpstreamListError as exc:
            logger.warning("%s", exc)
            return PlainTextResponse(
                f"Could not list repositories for {org}", status_code=exc.status_code
            )
        except Exception:
            logger.exception("Failed to build leaderboard for %s", org)
            return PlainTextResponse(FAILURE_MESSAGE, status_code=500)

        if result.is_empty:
            return PlainTextResponse(no_data_message(org))
        return Response(
            content=result.svg,
            media_type=SVG_MEDIA_TYPE,
            headers={"Cache-Control": f"public, max-age={current.cache_max_age}"},
        )

    return app
