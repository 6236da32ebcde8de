"""Authentication endpoints."""

import logging
from urllib.parse import urlencode

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status

from whereto_auth.api.dependencies import (
    get_account_service,
    get_authentication_service,
    get_reset_service,
)
from whereto_auth.api.errors import GENERIC_RESET_MESSAGE
from whereto_auth.domain.clock import utcnow
from whereto_auth.domain.errors import UserNotFound
from whereto_auth.domain.schemas.auth import (
    LoginRequest,
    MessageResponse,
    PasswordResetConfirm,
    PasswordResetRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from whereto_auth.domain.services import (
    AccountService,
    AuthenticationService,
    PasswordResetService,
    create_access_token,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
) -> RegisterResponse:
    """Create an account.

    - Returns 400 if a field is missing, the password is too short,
      or the email is already registered
    """
    user = await accounts.create_account(payload.name, payload.email, payload.password)
    return RegisterResponse(message="User created successfully", user=user)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: Request,
    login_data: LoginRequest,
    auth: AuthenticationService = Depends(get_authentication_service),
) -> TokenResponse:
    """Authenticate user and return JWT token.

    - Returns 400 if email or password is missing
    - Returns 401 with the same message for unknown email and wrong password
    """
    claim = await auth.authenticate(login_data.email, login_data.password)

    token, expires_at = create_access_token(
        claim, secret_key=request.app.state.jwt_secret_key
    )
    expires_in = int((expires_at - utcnow()).total_seconds())

    return TokenResponse(
        access_token=token,
        token_type="bearer",
        expires_in=expires_in,
        user=claim,
    )


async def dispatch_reset_link(resets: PasswordResetService, email: str, app_url: str) -> None:
    """Issue a reset token and email its link. Runs after the response is sent."""

    def link_for(secret: str) -> str:
        return f"{app_url}/auth/reset-password?{urlencode({'token': secret})}"

    try:
        delivered = await resets.send_reset_link(email, link_for)
        if not delivered:
            logger.error("Reset link delivery failed, pending reset was cancelled")
    except UserNotFound:
        logger.info("Password reset requested for unknown email")


@router.post(
    "/forgot-password",
    response_model=MessageResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def forgot_password(
    request: Request,
    reset_request: PasswordResetRequest,
    background_tasks: BackgroundTasks,
    resets: PasswordResetService = Depends(get_reset_service),
) -> MessageResponse:
    """Request password reset email.

    Always returns 202 with the same body so callers cannot tell whether
    the account exists or whether delivery worked. Lookup and delivery
    run in the background so response time does not depend on either.
    """
    background_tasks.add_task(
        dispatch_reset_link, resets, reset_request.email, request.app.state.app_url
    )
    return MessageResponse(message=GENERIC_RESET_MESSAGE)


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password(
    reset_data: PasswordResetConfirm,
    resets: PasswordResetService = Depends(get_reset_service),
) -> MessageResponse:
    """Reset password using the token from the emailed link.

    - Returns 400 for an unknown, used or expired token (one message for all)
    - Returns 400 if the new password is too short
    """
    await resets.consume(reset_data.token, reset_data.password)
    return MessageResponse(message="Password has been reset successfully")
