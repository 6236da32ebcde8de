"""Reset token generation, fingerprinting and expiry."""

import hashlib
import secrets
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

from whereto_auth import config
from whereto_auth.domain.clock import utcnow

RESET_TOKEN_BYTES = 32  # 256 bits
RESET_TOKEN_TTL = timedelta(minutes=config.RESET_TOKEN_TTL_MINUTES)


@dataclass(frozen=True)
class ResetToken:
    """A freshly issued reset token.

    ``secret`` goes into the emailed link and is never stored.
    ``fingerprint`` is what the user record keeps.
    """

    secret: str
    fingerprint: str
    expires_at: datetime


class ResetTokenCodec:
    def __init__(
        self,
        ttl: timedelta = RESET_TOKEN_TTL,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.ttl = ttl
        self.clock = clock

    def issue(self) -> ResetToken:
        """Generate a URL-safe secret with its fingerprint and expiry."""
        secret = secrets.token_hex(RESET_TOKEN_BYTES)
        return ResetToken(
            secret=secret,
            fingerprint=self.fingerprint_of(secret),
            expires_at=self.clock() + self.ttl,
        )

    @staticmethod
    def fingerprint_of(secret: str) -> str:
        """SHA256 hash of the secret for storage/lookup."""
        return hashlib.sha256(secret.encode()).hexdigest()

    def is_live(self, expires_at: datetime | None) -> bool:
        return expires_at is not None and expires_at > self.clock()
