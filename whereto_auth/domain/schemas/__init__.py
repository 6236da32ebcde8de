"""Pydantic schemas for records, claims and API payloads."""

from .auth import (
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    ProfileUpdate,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from .user import CredentialRecord, IdentityClaim

__all__ = [
    "CredentialRecord",
    "IdentityClaim",
    "LoginRequest",
    "MessageResponse",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "ProfileUpdate",
    "RegisterRequest",
    "RegisterResponse",
    "TokenResponse",
]
