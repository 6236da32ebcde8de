"""Authentication schemas for request/response models."""

from pydantic import BaseModel

from whereto_auth.domain.schemas.user import IdentityClaim


class RegisterRequest(BaseModel):
    """Account registration payload.

    Fields default to empty so the service, not the parser, reports
    missing values.
    """

    name: str = ""
    email: str = ""
    password: str = ""


class RegisterResponse(BaseModel):
    message: str
    user: IdentityClaim


class LoginRequest(BaseModel):
    """Login request with credentials."""

    email: str = ""
    password: str = ""


class TokenResponse(BaseModel):
    """JWT token response."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds until expiration
    user: IdentityClaim


class PasswordResetRequest(BaseModel):
    """Request to initiate password reset flow."""

    email: str = ""


class PasswordResetConfirm(BaseModel):
    """Confirm password reset with token."""

    token: str = ""
    password: str = ""


class ProfileUpdate(BaseModel):
    name: str = ""
    email: str = ""


class MessageResponse(BaseModel):
    message: str
