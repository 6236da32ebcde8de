"""Email + password authentication."""

import logging

from whereto_auth.domain.errors import InvalidPassword, MissingCredentials, UserNotFound
from whereto_auth.domain.ports import CredentialStore
from whereto_auth.domain.schemas.user import IdentityClaim
from whereto_auth.domain.services.passwords import PasswordHasher

logger = logging.getLogger(__name__)


class AuthenticationService:
    def __init__(self, store: CredentialStore, hasher: PasswordHasher):
        self.store = store
        self.hasher = hasher

    async def authenticate(self, email: str | None, password: str | None) -> IdentityClaim:
        """Check credentials and return the user's identity claim.

        Raises:
            MissingCredentials: email or password is empty
            UserNotFound: no record for this email
            InvalidPassword: password does not match

        The two failure kinds stay distinct here. Presenting them as one
        generic message is up to the caller.
        """
        if not email or not password:
            raise MissingCredentials("Please enter an email and password")

        record = await self.store.find_by_email(email)
        if record is None:
            self.hasher.dummy_verify(password)
            logger.info("Login failed: %s", UserNotFound.code.value)
            raise UserNotFound()

        if not self.hasher.verify(password, record.hashed_password):
            logger.info("Login failed for user %s: %s", record.id, InvalidPassword.code.value)
            raise InvalidPassword()

        return IdentityClaim.from_record(record)
