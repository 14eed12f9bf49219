# server/core/gate.py

from enum import Enum
from typing import Optional
from core.locale import split_locale
from core.sessions import SessionClaims


PUBLIC_PAGES = ("/sign-in", "/sign-up")
ONBOARDING_PAGE = "/onboarding"
DASHBOARD_PAGE = "/dashboard"
SIGN_IN_PAGE = "/sign-in"


class GateDecision(Enum):
    PASS = None
    SIGN_IN = SIGN_IN_PAGE
    ONBOARDING = ONBOARDING_PAGE
    DASHBOARD = DASHBOARD_PAGE

    @property
    def redirect_to(self) -> Optional[str]:
        return self.value


def _matches(path: str, page: str) -> bool:
    return path == page or path.startswith(page + "/")


def decide(claims: Optional[SessionClaims], path: str) -> GateDecision:
    """
    Decides what to do with a page request given its session claims
    (None when there is no valid session). Every request gets exactly one
    decision; a leading locale segment is ignored when matching paths.
    """
    _, page_path = split_locale(path)
    is_public = any(_matches(page_path, page) for page in PUBLIC_PAGES)
    on_onboarding = _matches(page_path, ONBOARDING_PAGE)

    if is_public:
        return GateDecision.DASHBOARD if claims else GateDecision.PASS

    if claims is None:
        return GateDecision.SIGN_IN

    if not claims.completed_onboarding and not on_onboarding:
        return GateDecision.ONBOARDING

    if claims.completed_onboarding and on_onboarding:
        return GateDecision.DASHBOARD

    return GateDecision.PASS
