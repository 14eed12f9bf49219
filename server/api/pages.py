# server/api/pages.py

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_optional_session
from core import config
from core.sessions import UserSession


router = APIRouter()


def check_locale(locale: str) -> str:
    if locale not in config.SUPPORTED_LOCALES:
        raise HTTPException(status_code=404, detail="Not found")
    return locale


@router.get("/{locale}")
def home(lang: str = Depends(check_locale)):
    return {"page": "home", "locale": lang}


@router.get("/{locale}/sign-in")
def sign_in_page(lang: str = Depends(check_locale)):
    return {"page": "sign-in", "locale": lang}


@router.get("/{locale}/sign-up")
def sign_up_page(lang: str = Depends(check_locale)):
    return {"page": "sign-up", "locale": lang}


@router.get("/{locale}/onboarding")
def onboarding_page(lang: str = Depends(check_locale)):
    return {"page": "onboarding", "locale": lang}


@router.get("/{locale}/dashboard")
def dashboard_page(
    lang: str = Depends(check_locale),
    session: Optional[UserSession] = Depends(get_optional_session),
):
    """
    Renders the signed-in user's session data.
    """
    if session is None or not session.authenticated:
        return {"page": "dashboard", "locale": lang, "session": None}

    return {
        "page": "dashboard",
        "locale": lang,
        "session": session.model_dump(by_alias=True, mode="json"),
    }
