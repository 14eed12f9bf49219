# server/api/dependencies.py

from typing import Optional
from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from core import config
from core.sessions import SessionClaims, UserSession, get_session_issuer, refresh_session
from database import get_db


def get_session_token(request: Request) -> Optional[str]:
    """
    Reads the session token from the session cookie, falling back to an
    Authorization: Bearer header.
    """
    token = request.cookies.get(config.SESSION_COOKIE_NAME)
    if token:
        return token

    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def get_session_claims(request: Request) -> Optional[SessionClaims]:
    return get_session_issuer().read(get_session_token(request))


def get_optional_session(
    request: Request,
    db: Session = Depends(get_db),
) -> Optional[UserSession]:
    """
    Refreshed session for the request, or None when there is no valid token.
    """
    token = get_session_token(request)
    claims = get_session_issuer().read(token)
    if claims is None:
        return None

    session = refresh_session(db, claims)
    session.expires = get_session_issuer().expires_at(token)
    return session


# -------------------------------
# Cookie Helpers
# -------------------------------

def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=config.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(get_session_issuer().max_age.total_seconds()),
        httponly=True,
        secure=config.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=config.SESSION_COOKIE_NAME, path="/")
