"""Collaborator interfaces the account services depend on."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from whereto_auth.domain.schemas.user import CredentialRecord


class CredentialStore(Protocol):
    """Lookup and persistence of user records.

    Implementations enforce email uniqueness: ``create`` raises
    ``UserAlreadyExists`` and ``save`` raises ``EmailAlreadyTaken`` on a
    conflicting email. ``save`` writes the whole snapshot at once.
    """

    async def find_by_email(self, email: str) -> CredentialRecord | None: ...

    async def find_by_id(self, user_id: UUID) -> CredentialRecord | None: ...

    async def find_by_reset_fingerprint(
        self, fingerprint: str, now: datetime
    ) -> CredentialRecord | None:
        """Return the record holding ``fingerprint`` if it expires after ``now``."""
        ...

    async def create(self, record: CredentialRecord) -> CredentialRecord: ...

    async def save(self, record: CredentialRecord) -> CredentialRecord: ...


class Notifier(Protocol):
    """Outbound email capability."""

    async def send_password_reset_link(self, email: str, reset_url: str) -> bool:
        """Deliver the link. Returns False when delivery failed."""
        ...
