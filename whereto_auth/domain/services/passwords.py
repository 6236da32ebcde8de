"""Password hashing with bcrypt via pwdlib."""

import base64
import hashlib
import logging
import secrets
import string

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.bcrypt import BcryptHasher

from whereto_auth import config
from whereto_auth.domain.errors import HashingError

logger = logging.getLogger(__name__)


class PasswordHasher:
    """Salted one-way password hashing with constant-time verification.

    bcrypt only accepts 72 bytes of input, so the password is first reduced
    to the base64 of its SHA256 digest (44 ASCII bytes). Every byte of the
    original password counts.
    """

    def __init__(self, rounds: int = config.BCRYPT_ROUNDS):
        self._context = PasswordHash((BcryptHasher(rounds=rounds),))
        self._dummy_hash = self.hash("whereto-timing-equaliser")

    @staticmethod
    def _prehash(password: str) -> str:
        return base64.b64encode(hashlib.sha256(password.encode()).digest()).decode()

    def hash(self, password: str) -> str:
        """Hash a password using bcrypt. Each call embeds a fresh salt."""
        try:
            return self._context.hash(self._prehash(password))
        except (OSError, NotImplementedError) as e:
            # salt generation reads os.urandom
            logger.exception("Entropy source unavailable while hashing password")
            raise HashingError() from e

    def verify(self, password: str, hashed_password: str) -> bool:
        """Verify a password against its hash.

        A malformed or foreign hash counts as a mismatch.
        """
        if not password or not hashed_password:
            return False
        try:
            return self._context.verify(self._prehash(password), hashed_password)
        except (UnknownHashError, ValueError):
            # input is always 44 bytes, so this is the stored hash's fault
            logger.warning("Stored password hash is malformed")
            return False

    def dummy_verify(self, password: str) -> None:
        """Spend one verification so a lookup miss costs the same as a mismatch."""
        self.verify(password or "-", self._dummy_hash)


def generate_temp_password(length: int = 12) -> str:
    """Generate a secure temporary password.

    Args:
        length: Password length (default 12)

    Returns:
        Random alphanumeric password
    """
    alphabet = string.ascii_letters + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length))
