# server/core/sessions.py

"""
Stateless sessions.

A session is a signed JWT carrying the user's id, username, email and
onboarding flag. Nothing is kept server-side: signing out means the
client drops the token. On read, the claims are refreshed from the
users table so the session follows changes made after issuance.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from core import config
from core.schemas import SessionUser, normalize_email
from models.user import User


logger = logging.getLogger(__name__)


class SessionClaims(BaseModel):
    """
    Identity claims carried inside a session token.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    completed_onboarding: bool = Field(default=False, alias="completedOnboarding")


class UserSession(BaseModel):
    """
    Request-scoped session handed to route handlers.
    `authenticated` is False when the token's user no longer exists.
    """
    user: SessionUser
    expires: Optional[datetime] = None
    authenticated: bool = True

    def to_claims(self) -> SessionClaims:
        return SessionClaims(
            id=self.user.id,
            username=self.user.username,
            email=self.user.email,
            completed_onboarding=self.user.completed_onboarding,
        )


def claims_for(user: User) -> SessionClaims:
    return SessionClaims(
        id=user.id,
        username=user.username,
        email=user.email,
        completed_onboarding=bool(user.completed_onboarding),
    )


# -------------------------------
# Session Issuer
# -------------------------------

class SessionIssuer:

    def __init__(
        self,
        secret_key: Optional[str] = None,
        algorithm: Optional[str] = None,
        max_age: Optional[timedelta] = None,
    ):
        self._secret_key = secret_key or config.SECRET_KEY
        if not self._secret_key:
            raise RuntimeError(
                "Session signing key missing. Set the JWT_SECRET_KEY environment variable."
            )
        self._algorithm = algorithm or config.ALGORITHM
        self.max_age = max_age or timedelta(minutes=config.SESSION_MAX_AGE_MINUTES)

    def issue(self, identity: User | SessionClaims) -> str:
        claims = identity if isinstance(identity, SessionClaims) else claims_for(identity)
        now = datetime.now(timezone.utc)

        to_encode = claims.model_dump(by_alias=True)
        to_encode.update({"iat": now, "exp": now + self.max_age})
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def read(self, token: Optional[str]) -> Optional[SessionClaims]:
        """
        Returns the token's claims, or None if it is missing, expired,
        tampered with, or otherwise unreadable.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.debug("Rejected session token: %s", e)
            return None
        return SessionClaims.model_validate(payload)

    def expires_at(self, token: str) -> Optional[datetime]:
        try:
            exp = jwt.get_unverified_claims(token).get("exp")
        except JWTError:
            return None
        return datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None


def refresh_session(db: Session, claims: SessionClaims) -> UserSession:
    """
    Rebuilds the session from the current user record.

    The user is looked up by the `id` claim; `email` is used only when a
    token carries no id. When no user matches, the token's claims are kept
    as they are and the session is marked unauthenticated.
    """
    if claims.id:
        user = db.get(User, claims.id)
    elif claims.email:
        user = db.query(User).filter(User.email == normalize_email(claims.email)).first()
    else:
        user = None

    if user is None:
        return UserSession(
            user=SessionUser(
                id=claims.id,
                username=claims.username,
                email=claims.email,
                completed_onboarding=claims.completed_onboarding,
            ),
            authenticated=False,
        )

    return UserSession(
        user=SessionUser(
            id=user.id,
            username=user.username,
            email=claims.email or user.email,
            image=user.image,
            completed_onboarding=bool(user.completed_onboarding),
        ),
    )


# Module-level issuer getter
_issuer_instance: Optional[SessionIssuer] = None


def get_session_issuer() -> SessionIssuer:
    global _issuer_instance
    if _issuer_instance is None:
        _issuer_instance = SessionIssuer()
    return _issuer_instance


def reset_session_issuer() -> None:
    """Drops the cached issuer (for tests or a rotated key)."""
    global _issuer_instance
    _issuer_instance = None
