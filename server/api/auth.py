# server/api/auth.py

import logging
from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from api.dependencies import clear_session_cookie, get_optional_session, set_session_cookie
from core.credentials import authenticate
from core.exceptions import (
    InvalidPasswordError,
    MissingCredentialsError,
    NexioError,
    NoAccountFoundError,
)
from core.registration import register_user
from core.schemas import PublicUser, SignInRequest
from core.sessions import UserSession, get_session_issuer
from database import get_db


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth")

# Shown for both unknown accounts and wrong passwords.
SIGN_IN_FAILED = "Sign-in failed: The email or password you entered is incorrect."


def error_response(error: NexioError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def session_body(session: UserSession) -> dict:
    return session.model_dump(by_alias=True, mode="json", exclude={"authenticated"})


# -------------------------------
# Registration
# -------------------------------

@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: Any = Body(None), db: Session = Depends(get_db)):
    try:
        user = register_user(db, payload)
    except NexioError as e:
        return error_response(e)

    return {
        "message": "Registration Successful! Account created.",
        "user": PublicUser.model_validate(user).model_dump(by_alias=True, mode="json"),
    }


# -------------------------------
# Credentials Sign-in
# -------------------------------

@router.post("/signin")
def sign_in(payload: Optional[dict] = Body(None), db: Session = Depends(get_db)):
    try:
        credentials = SignInRequest.model_validate(payload or {})
    except SchemaValidationError:
        return error_response(MissingCredentialsError())

    try:
        user = authenticate(db, credentials.email, credentials.password)
    except (NoAccountFoundError, InvalidPasswordError) as e:
        logger.info("Sign-in rejected (%s) for %s", e.code, e.details.get("email"))
        return JSONResponse(status_code=e.status_code, content={"message": SIGN_IN_FAILED})
    except NexioError as e:
        logger.info("Sign-in rejected (%s)", e.code)
        return error_response(e)

    issuer = get_session_issuer()
    access_token = issuer.issue(user)
    session = UserSession.model_validate({
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "image": user.image,
            "completed_onboarding": bool(user.completed_onboarding),
        },
        "expires": issuer.expires_at(access_token),
    })
    logger.info("User %s signed in", user.id)

    response = JSONResponse(content={
        "access_token": access_token,
        "token_type": "bearer",
        "session": session_body(session),
    })
    set_session_cookie(response, access_token)
    return response


# -------------------------------
# Session
# -------------------------------

@router.get("/session")
def read_session(session: Optional[UserSession] = Depends(get_optional_session)):
    """
    Returns the session refreshed from the users table and re-issues the
    cookie so its claims follow the stored record.
    """
    if session is None or not session.authenticated:
        response = JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"message": "Not authenticated"},
        )
        if session is not None:
            clear_session_cookie(response)
        return response

    issuer = get_session_issuer()
    token = issuer.issue(session.to_claims())
    session.expires = issuer.expires_at(token)

    response = JSONResponse(content=session_body(session))
    set_session_cookie(response, token)
    return response


@router.post("/signout")
def sign_out():
    response = JSONResponse(content={"message": "Signed out"})
    clear_session_cookie(response)
    return response
