"""Account creation and profile management."""

import logging
from uuid import UUID

from whereto_auth import config
from whereto_auth.domain.errors import (
    EmailAlreadyTaken,
    MissingCredentials,
    UserAlreadyExists,
    UserNotFound,
    WeakPassword,
)
from whereto_auth.domain.ports import CredentialStore
from whereto_auth.domain.schemas.user import CredentialRecord, IdentityClaim
from whereto_auth.domain.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)


def check_password_strength(password: str, min_length: int = config.MIN_PASSWORD_LENGTH) -> None:
    """Raise WeakPassword if the password is shorter than ``min_length``."""
    if len(password) < min_length:
        raise WeakPassword(f"Password must be at least {min_length} characters long")


class AccountService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        min_password_length: int = config.MIN_PASSWORD_LENGTH,
    ):
        self.store = store
        self.hasher = hasher
        self.min_password_length = min_password_length

    async def create_account(self, name: str, email: str, password: str) -> IdentityClaim:
        if not name or not email or not password:
            raise MissingCredentials()
        check_password_strength(password, self.min_password_length)

        if await self.store.find_by_email(email) is not None:
            raise UserAlreadyExists()

        record = CredentialRecord(
            name=name,
            email=email,
            hashed_password=self.hasher.hash(password),
        )
        record = await self.store.create(record)
        logger.info("Created user %s", record.id)
        return IdentityClaim.from_record(record)

    async def get_profile(self, user_id: UUID) -> IdentityClaim:
        record = await self.store.find_by_id(user_id)
        if record is None:
            raise UserNotFound()
        return IdentityClaim.from_record(record)

    async def update_profile(self, user_id: UUID, name: str, email: str) -> IdentityClaim:
        """Change display name and email.

        Raises EmailAlreadyTaken when another user already has ``email``.
        """
        if not name or not email:
            raise MissingCredentials("Name and email are required")

        record = await self.store.find_by_id(user_id)
        if record is None:
            raise UserNotFound()

        if email != record.email:
            other = await self.store.find_by_email(email)
            if other is not None and other.id != record.id:
                raise EmailAlreadyTaken()

        record = await self.store.save(record.with_profile(name=name, email=email))
        return IdentityClaim.from_record(record)
