# server/core/schemas.py

import re
from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# Basic local@domain.tld shape; deliverability is not checked.
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

MIN_PASSWORD_LENGTH = 8
MIN_USERNAME_LENGTH = 2


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email or ""))


# -------------------------------
# Authentication
# -------------------------------

class SignUpRequest(BaseModel):
    username: str = Field(min_length=MIN_USERNAME_LENGTH)
    email: str
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)

    @field_validator("email")
    @classmethod
    def email_shape(cls, value: str) -> str:
        if not is_valid_email(value.strip()):
            raise ValueError("Please enter a valid email address.")
        return value


class SignInRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class PublicUser(BaseModel):
    """
    Projection of a user returned after registration. Never carries the hash.
    """
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str
    created_at: datetime = Field(serialization_alias="createdAt")
    name: Optional[str] = None


class SessionUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[str] = None
    username: Optional[str] = None
    email: Optional[str] = None
    image: Optional[str] = None
    completed_onboarding: bool = Field(default=False, serialization_alias="completedOnboarding")


# -------------------------------
# Onboarding
# -------------------------------

Role = Literal["developer", "designer", "manager", "student", "entrepreneur", "other"]
Interest = Literal[
    "mindMapping",
    "taskManagement",
    "teamCollaboration",
    "timeTracking",
    "noteTaking",
    "projectPlanning",
]
Experience = Literal["beginner", "intermediate", "advanced"]


class OnboardingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Step 1: personal information
    first_name: str = Field(alias="firstName", min_length=1, max_length=50)
    last_name: str = Field(alias="lastName", min_length=1, max_length=50)
    company: Optional[str] = Field(default=None, max_length=100)
    role: Role

    # Step 2: preferences
    interests: list[Interest] = Field(min_length=1)
    experience: Experience
    email_notifications: bool = Field(default=True, alias="emailNotifications")
    push_notifications: bool = Field(default=True, alias="pushNotifications")
    weekly_digest: bool = Field(default=False, alias="weeklyDigest")

    # Step 3: complete setup
    avatar: Optional[str] = None
    bio: Optional[str] = Field(default=None, max_length=500)
    timezone: str = Field(min_length=1)

    @field_validator("avatar")
    @classmethod
    def avatar_url(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not re.match(r"^https?://[^\s/$.?#][^\s]*$", value):
            raise ValueError("Please provide a valid image URL")
        return value
