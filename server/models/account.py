# server/models/account.py

import uuid
from sqlalchemy import Column, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import relationship
from . import Base


class Account(Base):
    """
    Links a user to an identity at a social sign-in provider.
    """
    __tablename__ = "accounts"
    __table_args__ = (
        UniqueConstraint("provider", "provider_account_id", name="uq_accounts_provider_account"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    provider = Column(String, nullable=False)
    provider_account_id = Column(String, nullable=False)

    user = relationship("User", back_populates="accounts")
