# server/api/onboarding.py

from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from api.dependencies import get_optional_session, set_session_cookie
from core.exceptions import NexioError, NoAccountFoundError
from core.onboarding import complete_onboarding
from core.sessions import UserSession, claims_for, get_session_issuer
from database import get_db


router = APIRouter(prefix="/api")


@router.post("/onboarding")
def submit_onboarding(
    payload: Any = Body(None),
    session: Optional[UserSession] = Depends(get_optional_session),
    db: Session = Depends(get_db),
):
    """
    Saves the onboarding wizard for the signed-in user and re-issues the
    session cookie with completedOnboarding set.
    """
    if session is None or not session.authenticated or not session.user.id:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Unauthorized"},
        )

    try:
        user = complete_onboarding(db, session.user.id, payload)
    except NoAccountFoundError:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"success": False, "message": "Unauthorized"},
        )
    except NexioError as e:
        return JSONResponse(
            status_code=e.status_code,
            content={"success": False, "message": e.message},
        )

    response = JSONResponse(content={"success": True})
    set_session_cookie(response, get_session_issuer().issue(claims_for(user)))
    return response
