"""Shared FastAPI dependencies.

Services are built per request from the collaborators the application
was created with (see ``main.create_app``).
"""

from fastapi import Depends, HTTPException, Request, status

from whereto_auth.domain.schemas.user import IdentityClaim
from whereto_auth.domain.services import (
    AccountService,
    AuthenticationService,
    PasswordResetService,
    verify_token,
)

__all__ = [
    "get_account_service",
    "get_authentication_service",
    "get_reset_service",
    "require_claim",
]


def get_authentication_service(request: Request) -> AuthenticationService:
    state = request.app.state
    return AuthenticationService(state.store, state.hasher)


def get_account_service(request: Request) -> AccountService:
    state = request.app.state
    return AccountService(state.store, state.hasher)


def get_reset_service(request: Request) -> PasswordResetService:
    state = request.app.state
    return PasswordResetService(state.store, state.hasher, state.codec, state.notifier)


async def require_claim(request: Request) -> IdentityClaim:
    """Require a valid Bearer JWT and return its identity claim.

    Raises 401 if the header is missing or the token is invalid/expired.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = auth_header.split(" ", 1)[1]
    claim = verify_token(token, secret_key=request.app.state.jwt_secret_key)
    if claim is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return claim


CurrentClaim = Depends(require_claim)
