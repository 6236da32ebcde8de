"""Error kinds raised by the account services.

Every expected failure carries an ``ErrorCode`` tag. Callers branch on
``exc.code`` rather than on the message text.
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Closed set of failure tags."""

    MISSING_CREDENTIALS = "missing_credentials"
    USER_NOT_FOUND = "user_not_found"
    INVALID_PASSWORD = "invalid_password"
    USER_ALREADY_EXISTS = "user_already_exists"
    EMAIL_ALREADY_TAKEN = "email_already_taken"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    WEAK_PASSWORD = "weak_password"
    HASHING_FAILED = "hashing_failed"


class AuthError(Exception):
    """Base class for all account service errors."""

    code: ErrorCode
    message: str = "Authentication error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class MissingCredentials(AuthError):
    code = ErrorCode.MISSING_CREDENTIALS
    message = "Please provide all required fields"


class UserNotFound(AuthError):
    code = ErrorCode.USER_NOT_FOUND
    message = "User not found"


class InvalidPassword(AuthError):
    code = ErrorCode.INVALID_PASSWORD
    message = "Invalid password"


class UserAlreadyExists(AuthError):
    code = ErrorCode.USER_ALREADY_EXISTS
    message = "User already exists"


class EmailAlreadyTaken(AuthError):
    code = ErrorCode.EMAIL_ALREADY_TAKEN
    message = "Email is already taken"


class InvalidOrExpiredToken(AuthError):
    code = ErrorCode.INVALID_OR_EXPIRED_TOKEN
    message = "Invalid or expired reset token"


class WeakPassword(AuthError):
    code = ErrorCode.WEAK_PASSWORD
    message = "Password must be at least 6 characters long"


class HashingError(AuthError):
    """Entropy source failure while hashing. Not recoverable."""

    code = ErrorCode.HASHING_FAILED
    message = "Hashing failed"

