"""Database models for WhereTo accounts.

Uses SQLModel for unified Pydantic + SQLAlchemy models.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from whereto_auth.domain.clock import utcnow


class User(SQLModel, table=True):
    """User account for email/password login.

    The reset token is stored as a SHA256 fingerprint, never in raw form.
    All timestamps are timezone-aware UTC.
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(unique=True, index=True, max_length=255)
    hashed_password: str = Field(max_length=255)
    image: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    # Pending password reset, set and cleared together
    reset_token_hash: str | None = Field(default=None, max_length=64, index=True)
    reset_token_expires_at: datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )
