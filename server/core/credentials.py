# server/core/credentials.py

import logging
from sqlalchemy.orm import Session
from core.exceptions import (
    AuthenticationError,
    AuthenticationUnavailableError,
    InvalidEmailFormatError,
    InvalidPasswordError,
    MissingCredentialsError,
    NoAccountFoundError,
    PasswordTooShortError,
)
from core.passwords import verify_password
from core.schemas import MIN_PASSWORD_LENGTH, is_valid_email, normalize_email
from models.user import User


logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def authenticate(db: Session, email: str | None, password: str | None) -> User:
    """
    Checks an (email, password) pair against the stored credentials.
    Each failure raises its own AuthenticationError subclass, in the
    order the checks run. One attempt per call, no retries.
    """
    if not email or not password:
        raise MissingCredentialsError()

    if not is_valid_email(email.strip()):
        raise InvalidEmailFormatError()

    if len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordTooShortError()

    try:
        user = get_user_by_email(db, email)

        # Social-only accounts have no password to check against.
        if user is None or not user.hashed_password:
            raise NoAccountFoundError(normalize_email(email))

        if not verify_password(password, user.hashed_password):
            raise InvalidPasswordError(normalize_email(email))

        return user
    except AuthenticationError:
        raise
    except Exception:
        logger.exception("Authentication error for %s", normalize_email(email))
        raise AuthenticationUnavailableError()
