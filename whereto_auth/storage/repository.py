"""SQL-backed credential store."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError

from whereto_auth.domain.errors import EmailAlreadyTaken, UserAlreadyExists, UserNotFound
from whereto_auth.domain.schemas.user import CredentialRecord
from whereto_auth.storage.database import Database
from whereto_auth.storage.models import User


class SqlCredentialStore:
    """CredentialStore over the ``users`` table.

    Each call runs in its own short transaction. ``save`` issues a single
    UPDATE so every field of the snapshot lands together.
    """

    def __init__(self, database: Database):
        self.database = database

    async def _find_one(self, *criteria) -> CredentialRecord | None:
        async with self.database.session() as db:
            result = await db.execute(select(User).where(*criteria))
            user = result.scalar_one_or_none()
        return CredentialRecord.model_validate(user) if user else None

    async def find_by_email(self, email: str) -> CredentialRecord | None:
        return await self._find_one(User.email == email)

    async def find_by_id(self, user_id: UUID) -> CredentialRecord | None:
        return await self._find_one(User.id == user_id)

    async def find_by_reset_fingerprint(
        self, fingerprint: str, now: datetime
    ) -> CredentialRecord | None:
        return await self._find_one(
            User.reset_token_hash == fingerprint,
            User.reset_token_expires_at > now,
        )

    async def create(self, record: CredentialRecord) -> CredentialRecord:
        try:
            async with self.database.session() as db:
                db.add(User(**record.model_dump()))
        except IntegrityError as e:
            raise UserAlreadyExists() from e
        return record

    async def save(self, record: CredentialRecord) -> CredentialRecord:
        values = record.model_dump(exclude={"id", "created_at"})
        try:
            async with self.database.session() as db:
                result = await db.execute(
                    update(User).where(User.id == record.id).values(**values)
                )
                if result.rowcount == 0:
                    raise UserNotFound()
        except IntegrityError as e:
            raise EmailAlreadyTaken() from e
        return record
