# server/core/registration.py

import logging
from typing import Any
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import (
    EmailTakenError,
    NexioError,
    RegistrationUnavailableError,
    RegistrationValidationError,
    UsernameTakenError,
)
from core.passwords import hash_password
from core.schemas import SignUpRequest, normalize_email
from models.user import User


logger = logging.getLogger(__name__)


def validate_sign_up(payload: Any) -> SignUpRequest:
    if not isinstance(payload, dict):
        raise RegistrationValidationError(["Request body must be a JSON object."])
    try:
        return SignUpRequest.model_validate(payload)
    except SchemaValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        ]
        raise RegistrationValidationError(errors)


def username_exists(db: Session, username: str) -> bool:
    return db.query(User.id).filter(User.username == username).first() is not None


def email_exists(db: Session, email: str) -> bool:
    return db.query(User.id).filter(User.email == normalize_email(email)).first() is not None


def register_user(db: Session, payload: Any) -> User:
    """
    Validates the sign-up payload, checks that the username and email are
    free, and stores the new user with a bcrypt hash of the password.

    The lookups only give early, specific errors. Two concurrent requests
    can both pass them; the table's unique indexes decide, and the insert
    that loses is reported as the matching conflict.
    """
    data = validate_sign_up(payload)
    email = normalize_email(data.email)

    try:
        if username_exists(db, data.username):
            raise UsernameTakenError(data.username)

        if email_exists(db, email):
            raise EmailTakenError(email)

        new_user = User(
            username=data.username,
            email=email,
            hashed_password=hash_password(data.password),
            completed_onboarding=False,
        )
        db.add(new_user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise _conflict_for(db, data.username, email)

        db.refresh(new_user)
        logger.info("Registered user %s (%s)", new_user.username, new_user.id)
        return new_user
    except NexioError:
        raise
    except Exception:
        db.rollback()
        logger.exception("Sign-up error for %s", email)
        raise RegistrationUnavailableError()


def _conflict_for(db: Session, username: str, email: str) -> NexioError:
    if username_exists(db, username):
        logger.info("Lost username race for %s", username)
        return UsernameTakenError(username)
    if email_exists(db, email):
        logger.info("Lost email race for %s", email)
        return EmailTakenError(email)
    logger.error("Insert for %s failed a constraint other than username/email", email)
    return RegistrationUnavailableError()
