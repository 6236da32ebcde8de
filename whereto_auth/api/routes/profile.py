"""Profile endpoints for the signed-in user."""

from fastapi import APIRouter, Depends, HTTPException, status

from whereto_auth.api.dependencies import CurrentClaim, get_account_service
from whereto_auth.domain.errors import UserNotFound
from whereto_auth.domain.schemas.auth import ProfileUpdate
from whereto_auth.domain.schemas.user import IdentityClaim
from whereto_auth.domain.services import AccountService

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=IdentityClaim)
async def get_profile(
    claim: IdentityClaim = CurrentClaim,
    accounts: AccountService = Depends(get_account_service),
) -> IdentityClaim:
    try:
        return await accounts.get_profile(claim.id)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")


@router.put("", response_model=IdentityClaim)
async def update_profile(
    update: ProfileUpdate,
    claim: IdentityClaim = CurrentClaim,
    accounts: AccountService = Depends(get_account_service),
) -> IdentityClaim:
    """Update name and email.

    Returns 400 if either is missing or the email belongs to someone else.
    """
    try:
        return await accounts.update_profile(claim.id, update.name, update.email)
    except UserNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
