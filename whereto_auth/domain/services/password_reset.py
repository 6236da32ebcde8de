"""Password reset flow: issue, dispatch, consume and cancel.

A user record is either idle or holds one pending reset (a token
fingerprint plus its expiry). ``issue`` moves it to pending, ``consume``
and ``cancel`` move it back. Issuing again replaces the pending token, so
at most one secret is valid per user.
"""

import logging
from collections.abc import Callable

from whereto_auth import config
from whereto_auth.domain.errors import InvalidOrExpiredToken, MissingCredentials, UserNotFound
from whereto_auth.domain.ports import CredentialStore, Notifier
from whereto_auth.domain.schemas.user import IdentityClaim
from whereto_auth.domain.services.accounts import check_password_strength
from whereto_auth.domain.services.passwords import PasswordHasher
from whereto_auth.domain.services.reset_tokens import ResetToken, ResetTokenCodec

logger = logging.getLogger(__name__)


class PasswordResetService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        codec: ResetTokenCodec,
        notifier: Notifier,
        min_password_length: int = config.MIN_PASSWORD_LENGTH,
    ):
        self.store = store
        self.hasher = hasher
        self.codec = codec
        self.notifier = notifier
        self.min_password_length = min_password_length

    async def issue(self, email: str) -> ResetToken:
        """Start a reset for ``email`` and return the token.

        The fingerprint is persisted before the secret is returned.

        Raises:
            UserNotFound: no record for this email. Callers facing the
                public must not reveal this.
        """
        if not email:
            raise MissingCredentials("Email is required")

        record = await self.store.find_by_email(email)
        if record is None:
            raise UserNotFound()

        token = self.codec.issue()
        await self.store.save(record.with_pending_reset(token.fingerprint, token.expires_at))
        logger.info("Issued password reset for user %s", record.id)
        return token

    async def consume(self, secret: str, new_password: str) -> IdentityClaim:
        """Set a new password using a reset secret. Works once per secret.

        Raises:
            InvalidOrExpiredToken: unknown secret or expired token
            WeakPassword: new password too short. Nothing is changed.
        """
        if not secret:
            raise InvalidOrExpiredToken()

        now = self.codec.clock()
        record = await self.store.find_by_reset_fingerprint(self.codec.fingerprint_of(secret), now)
        if record is None or not self.codec.is_live(record.reset_token_expires_at):
            raise InvalidOrExpiredToken()

        check_password_strength(new_password, self.min_password_length)

        record = await self.store.save(record.with_new_password(self.hasher.hash(new_password)))
        logger.info("Password reset completed for user %s", record.id)
        return IdentityClaim.from_record(record)

    async def cancel(self, email: str, fingerprint: str | None = None) -> None:
        """Drop a pending reset. Unknown users and idle records are ignored.

        With ``fingerprint`` given, only that token is dropped. A newer token
        issued in the meantime is left alone.
        """
        if not email:
            return
        record = await self.store.find_by_email(email)
        if record is None or not record.has_pending_reset:
            return
        if fingerprint is not None and record.reset_token_hash != fingerprint:
            return
        await self.store.save(record.without_pending_reset())
        logger.info("Cancelled pending password reset for user %s", record.id)

    async def send_reset_link(self, email: str, link_for: Callable[[str], str]) -> bool:
        """Issue a token and email the link built by ``link_for(secret)``.

        If delivery fails the pending reset is cancelled and False is
        returned. UserNotFound from ``issue`` propagates.
        """
        token = await self.issue(email)
        try:
            delivered = await self.notifier.send_password_reset_link(email, link_for(token.secret))
        except Exception:
            logger.exception("Password reset email dispatch raised")
            delivered = False

        if not delivered:
            logger.error("Password reset email not delivered, rolling back")
            await self.cancel(email, token.fingerprint)
        return delivered
