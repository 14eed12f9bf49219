# server/models/user.py

import uuid
from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.orm import relationship
from . import Base


def _now():
    return datetime.now(timezone.utc)


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Database model for application users.
    Social-only accounts have no hashed_password; emails are stored
    lower-cased and trimmed.
    """
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = Column(String, unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=True)

    name = Column(String, nullable=True)
    surname = Column(String, nullable=True)
    image = Column(String, nullable=True)
    completed_onboarding = Column(Boolean, nullable=False, default=False)

    # Onboarding profile
    company = Column(String, nullable=True)
    role = Column(String, nullable=True)
    interests = Column(JSON, nullable=True)
    experience = Column(String, nullable=True)
    email_notifications = Column(Boolean, nullable=False, default=True)
    push_notifications = Column(Boolean, nullable=False, default=True)
    weekly_digest = Column(Boolean, nullable=False, default=False)
    bio = Column(Text, nullable=True)
    timezone = Column(String, nullable=True)

    created_at = Column(DateTime, default=_now, nullable=False)
    updated_at = Column(DateTime, default=_now, onupdate=_now, nullable=False)

    accounts = relationship("Account", back_populates="user", cascade="all, delete-orphan")
