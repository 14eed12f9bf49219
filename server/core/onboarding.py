# server/core/onboarding.py

import logging
from typing import Any
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from core.exceptions import (
    NexioError,
    NoAccountFoundError,
    OnboardingUnavailableError,
    OnboardingValidationError,
)
from core.schemas import OnboardingRequest
from models.user import User


logger = logging.getLogger(__name__)


# Wizard messages keyed by (field alias, pydantic error type).
FIELD_MESSAGES = {
    ("firstName", "string_too_short"): "First name is required",
    ("firstName", "missing"): "First name is required",
    ("firstName", "string_too_long"): "First name must be less than 50 characters",
    ("lastName", "string_too_short"): "Last name is required",
    ("lastName", "missing"): "Last name is required",
    ("lastName", "string_too_long"): "Last name must be less than 50 characters",
    ("company", "string_too_long"): "Company name must be less than 100 characters",
    ("role", "missing"): "Please select a role",
    ("role", "literal_error"): "Please select a role",
    ("interests", "too_short"): "Please select at least one interest",
    ("interests", "missing"): "Please select at least one interest",
    ("experience", "missing"): "Please select your experience level",
    ("experience", "literal_error"): "Please select your experience level",
    ("avatar", "value_error"): "Please provide a valid image URL",
    ("bio", "string_too_long"): "Bio must be less than 500 characters",
    ("timezone", "string_too_short"): "Please select your timezone",
    ("timezone", "missing"): "Please select your timezone",
}


def validate_onboarding(payload: Any) -> OnboardingRequest:
    if not isinstance(payload, dict):
        raise OnboardingValidationError(["Request body must be a JSON object."])
    try:
        return OnboardingRequest.model_validate(payload)
    except SchemaValidationError as e:
        messages = []
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else ""
            message = FIELD_MESSAGES.get((field, err["type"]), err["msg"])
            if message not in messages:
                messages.append(message)
        raise OnboardingValidationError(messages)


def complete_onboarding(db: Session, user_id: str, payload: Any) -> User:
    """
    Stores the wizard's answers on the user and marks onboarding complete.
    """
    data = validate_onboarding(payload)

    try:
        user = db.get(User, user_id)
        if user is None:
            raise NoAccountFoundError()

        user.name = data.first_name
        user.surname = data.last_name
        if "company" in data.model_fields_set:
            user.company = data.company
        user.role = data.role
        user.interests = list(data.interests)
        user.experience = data.experience
        user.email_notifications = data.email_notifications
        user.push_notifications = data.push_notifications
        user.weekly_digest = data.weekly_digest
        if "bio" in data.model_fields_set:
            user.bio = data.bio
        user.timezone = data.timezone
        if data.avatar:
            user.image = data.avatar
        user.completed_onboarding = True

        db.commit()
        db.refresh(user)
        logger.info("User %s completed onboarding", user.id)
        return user
    except NexioError:
        raise
    except Exception:
        db.rollback()
        logger.exception("Failed to update onboarding data for %s", user_id)
        raise OnboardingUnavailableError()
