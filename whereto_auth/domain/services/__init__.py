"""Domain services for business logic."""

from .accounts import AccountService, check_password_strength
from .authentication import AuthenticationService
from .email import SmtpNotifier
from .password_reset import PasswordResetService
from .passwords import PasswordHasher, generate_temp_password
from .reset_tokens import ResetToken, ResetTokenCodec
from .sessions import create_access_token, verify_token

__all__ = [
    "AccountService",
    "AuthenticationService",
    "PasswordHasher",
    "PasswordResetService",
    "ResetToken",
    "ResetTokenCodec",
    "SmtpNotifier",
    "check_password_strength",
    "create_access_token",
    "generate_temp_password",
    "verify_token",
]
