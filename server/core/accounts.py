# server/core/accounts.py

"""
Social sign-in accounts.

The OAuth exchange itself belongs to the provider library; once it has a
verified profile, link_provider_account() finds or creates the local user
for it. Users created here have no password and can only sign in through
their provider.
"""

import logging
import re
from typing import Optional
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.exceptions import AccountNotLinkedError, AuthenticationUnavailableError
from core.schemas import normalize_email
from models.account import Account
from models.user import User


logger = logging.getLogger(__name__)


class ProviderProfile(BaseModel):
    provider: str
    provider_account_id: str
    email: str
    name: Optional[str] = None
    image: Optional[str] = None


def _username_base(email: str) -> str:
    local = email.split("@", 1)[0]
    base = re.sub(r"[^a-z0-9_.-]", "", local.lower())
    return base if len(base) >= 2 else f"user{base}"


def available_username(db: Session, email: str) -> str:
    base = _username_base(email)
    candidate = base
    suffix = 1
    while db.query(User.id).filter(User.username == candidate).first() is not None:
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def _find_account(db: Session, profile: ProviderProfile) -> Optional[Account]:
    return (
        db.query(Account)
        .filter(
            Account.provider == profile.provider,
            Account.provider_account_id == profile.provider_account_id,
        )
        .first()
    )


# Attempts at picking a free username when a concurrent insert takes it first.
USERNAME_ATTEMPTS = 2


def link_provider_account(db: Session, profile: ProviderProfile) -> User:
    """
    Returns the user linked to the provider identity, creating one when
    the identity and its email are both new.

    An email already owned by another account is never linked implicitly;
    AccountNotLinkedError is raised instead.
    """
    account = _find_account(db, profile)
    if account is not None:
        return account.user

    email = normalize_email(profile.email)
    if db.query(User.id).filter(User.email == email).first() is not None:
        logger.info("Refused to link %s account for existing email %s", profile.provider, email)
        raise AccountNotLinkedError(profile.provider, email)

    for _ in range(USERNAME_ATTEMPTS):
        user = User(
            username=available_username(db, email),
            email=email,
            hashed_password=None,
            name=profile.name,
            image=profile.image,
            completed_onboarding=False,
        )
        user.accounts.append(
            Account(provider=profile.provider, provider_account_id=profile.provider_account_id)
        )
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            # Another request may have linked the same identity first.
            account = _find_account(db, profile)
            if account is not None:
                return account.user
            if db.query(User.id).filter(User.email == email).first() is not None:
                raise AccountNotLinkedError(profile.provider, email)
            logger.info("Username %s taken concurrently, retrying", user.username)
            continue

        db.refresh(user)
        logger.info("Created %s user %s (%s)", profile.provider, user.username, user.id)
        return user

    logger.error("Could not find a free username for %s", email)
    raise AuthenticationUnavailableError()
