"""OAuth2 redirect endpoint completing the onboarding."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse

from ..core.exchange import AuthorizationExchange
from ..core.fanout import MembershipFanout
from ..errors import CommunitiesNotReady, OnboardingError

router = APIRouter(tags=["oauth"])
logger = logging.getLogger("hub_bot.web")

SUCCESS_MESSAGE = (
    "Thanks! Please close the browser window and return to Discord; you have "
    "now been added to the tournament servers."
)
FAILURE_MESSAGE = (
    "Something went wrong! Please contact the tournament staff for assistance."
)


def _page(success: bool) -> HTMLResponse:
    return HTMLResponse(
        content=SUCCESS_MESSAGE if success else FAILURE_MESSAGE, status_code=200
    )


@router.get("/callback", response_class=HTMLResponse)
async def oauth_callback(
    request: Request, code: str | None = None, error: str | None = None
) -> HTMLResponse:
    """Exchange the grant ``code`` and add its user to every satellite.

    The response is always a 200 page telling the user whether it worked;
    details of a failure only go to the log.
    """
    if error or not code:
        logger.warning("Authorization callback without a code (error=%s)", error)
        return _page(False)

    exchange: AuthorizationExchange = request.app.state.exchange
    fanout: MembershipFanout = request.app.state.fanout
    try:
        authorized = await exchange.exchange(code)
        report = await fanout.propagate(
            authorized.user_id,
            authorized.credential,
            authorized.role_name,
            nickname=authorized.nickname,
        )
    except (OnboardingError, CommunitiesNotReady) as exc:
        logger.info("Authorization callback failed: %s", exc)
        return _page(False)

    for outcome in report.outcomes:
        logger.info("%s: %s", outcome.guild_name, outcome.status.value)
    return _page(report.success)


def create_app(exchange: AuthorizationExchange, fanout: MembershipFanout) -> FastAPI:
    """Build the callback application around the given services."""
    app = FastAPI(
        title="hub_bot",
        description="OAuth2 callback for tournament onboarding",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.exchange = exchange
    app.state.fanout = fanout
    app.include_router(router)
    return app
