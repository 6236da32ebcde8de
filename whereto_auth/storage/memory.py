"""In-process credential store for tests and local experiments."""

import hmac
from datetime import datetime
from uuid import UUID

from whereto_auth.domain.errors import EmailAlreadyTaken, UserAlreadyExists, UserNotFound
from whereto_auth.domain.schemas.user import CredentialRecord


class InMemoryCredentialStore:
    """Dict-backed CredentialStore with the same uniqueness rules as the SQL one."""

    def __init__(self, records: list[CredentialRecord] | None = None):
        self.records: dict[UUID, CredentialRecord] = {}
        self.saves = 0
        for record in records or []:
            self.records[record.id] = record

    async def find_by_email(self, email: str) -> CredentialRecord | None:
        for record in self.records.values():
            if record.email == email:
                return record
        return None

    async def find_by_id(self, user_id: UUID) -> CredentialRecord | None:
        return self.records.get(user_id)

    async def find_by_reset_fingerprint(
        self, fingerprint: str, now: datetime
    ) -> CredentialRecord | None:
        for record in self.records.values():
            if (
                record.reset_token_hash is not None
                and hmac.compare_digest(record.reset_token_hash, fingerprint)
                and record.reset_token_expires_at > now
            ):
                return record
        return None

    async def create(self, record: CredentialRecord) -> CredentialRecord:
        if await self.find_by_email(record.email) is not None:
            raise UserAlreadyExists()
        self.records[record.id] = record
        return record

    async def save(self, record: CredentialRecord) -> CredentialRecord:
        if record.id not in self.records:
            raise UserNotFound()
        other = await self.find_by_email(record.email)
        if other is not None and other.id != record.id:
            raise EmailAlreadyTaken()
        self.records[record.id] = record
        self.saves += 1
        return record
