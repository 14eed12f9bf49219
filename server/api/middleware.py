# server/api/middleware.py

import logging
from fastapi import Request
from fastapi.responses import RedirectResponse

from api.dependencies import get_session_claims
from core import config
from core.gate import GateDecision, decide
from core.locale import localized_path, negotiate_locale, split_locale


logger = logging.getLogger(__name__)

# API routes, static assets, and framework docs are not gated.
EXCLUDED_PREFIXES = ("/api", "/static", "/_next", "/images", "/docs", "/redoc")
EXCLUDED_PATHS = ("/favicon.ico", "/openapi.json")


def is_gated(path: str) -> bool:
    if path in EXCLUDED_PATHS:
        return False
    return not any(path == prefix or path.startswith(prefix + "/") for prefix in EXCLUDED_PREFIXES)


async def request_gate(request: Request, call_next):
    """
    Redirects page requests according to the session state, otherwise
    hands them to locale resolution.
    """
    path = request.url.path
    if not is_gated(path):
        return await call_next(request)

    try:
        claims = get_session_claims(request)
    except RuntimeError:
        logger.exception("Session issuer unavailable; treating request as signed out")
        claims = None

    decision = decide(claims, path)
    if decision is not GateDecision.PASS:
        logger.debug("Gate redirect %s -> %s", path, decision.redirect_to)
        return RedirectResponse(url=decision.redirect_to, status_code=307)

    return await resolve_locale(request, call_next)


async def resolve_locale(request: Request, call_next):
    path = request.url.path
    locale, _ = split_locale(path)

    if locale is None:
        locale = negotiate_locale(
            request.cookies.get(config.LOCALE_COOKIE_NAME),
            request.headers.get("Accept-Language"),
        )
        return RedirectResponse(
            url=localized_path(locale, path, request.url.query),
            status_code=307,
        )

    response = await call_next(request)
    response.set_cookie(key=config.LOCALE_COOKIE_NAME, value=locale, path="/", samesite="lax")
    return response
