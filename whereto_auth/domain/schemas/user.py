"""User record snapshots and the identity claim handed out after login."""

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, field_validator, model_validator

from whereto_auth.domain.clock import as_utc, utcnow


class CredentialRecord(BaseModel):
    """Immutable snapshot of a stored user.

    Changes go through the ``with_*`` helpers, which return a new snapshot.
    The reset fingerprint and its expiry are always set or cleared together.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str
    email: str
    hashed_password: str = Field(min_length=1)
    image: str | None = None
    reset_token_hash: str | None = None
    reset_token_expires_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    model_config = {"frozen": True, "from_attributes": True}

    @field_validator("created_at", "updated_at", "reset_token_expires_at")
    @classmethod
    def _aware_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None

    @model_validator(mode="after")
    def _reset_pair_consistent(self) -> "CredentialRecord":
        if (self.reset_token_hash is None) != (self.reset_token_expires_at is None):
            raise ValueError(
                "reset_token_hash and reset_token_expires_at must be set together"
            )
        return self

    @property
    def has_pending_reset(self) -> bool:
        return self.reset_token_hash is not None

    def _changed(self, **changes) -> "CredentialRecord":
        # model_copy skips validation, so re-validate to keep the pair invariant
        data = self.model_dump()
        data.update(changes, updated_at=utcnow())
        return CredentialRecord.model_validate(data)

    def with_pending_reset(self, fingerprint: str, expires_at: datetime) -> "CredentialRecord":
        return self._changed(
            reset_token_hash=fingerprint,
            reset_token_expires_at=expires_at,
        )

    def without_pending_reset(self) -> "CredentialRecord":
        return self._changed(reset_token_hash=None, reset_token_expires_at=None)

    def with_new_password(self, hashed_password: str) -> "CredentialRecord":
        """Replace the password hash and drop any pending reset in one step."""
        return self._changed(
            hashed_password=hashed_password,
            reset_token_hash=None,
            reset_token_expires_at=None,
        )

    def with_profile(self, name: str, email: str) -> "CredentialRecord":
        return self._changed(name=name, email=email)


class IdentityClaim(BaseModel):
    """Non-secret user attributes returned after authentication."""

    id: UUID
    email: str
    name: str
    image: str | None = None

    @classmethod
    def from_record(cls, record: CredentialRecord) -> "IdentityClaim":
        return cls(id=record.id, email=record.email, name=record.name, image=record.image)
