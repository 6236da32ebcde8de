"""JWT session tokens carrying the identity claim."""

from datetime import datetime, timedelta
from uuid import UUID

from jose import JWTError, jwt

from whereto_auth import config
from whereto_auth.domain.clock import utcnow
from whereto_auth.domain.schemas.user import IdentityClaim


def create_access_token(
    claim: IdentityClaim,
    expires_delta: timedelta | None = None,
    secret_key: str = config.JWT_SECRET_KEY,
) -> tuple[str, datetime]:
    """Create JWT access token.

    Args:
        claim: Authenticated user's identity claim
        expires_delta: Lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES
        secret_key: Signing key

    Returns:
        Tuple of (token, expires_at datetime)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)

    expires_at = utcnow() + expires_delta
    to_encode = {
        "sub": str(claim.id),
        "email": claim.email,
        "name": claim.name,
        "image": claim.image,
        "exp": expires_at,
    }
    token = jwt.encode(to_encode, secret_key, algorithm=config.JWT_ALGORITHM)
    return token, expires_at


def verify_token(token: str, secret_key: str = config.JWT_SECRET_KEY) -> IdentityClaim | None:
    """Verify and decode JWT.

    Returns:
        The embedded identity claim, or None if invalid/expired
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[config.JWT_ALGORITHM])
        return IdentityClaim(
            id=UUID(payload["sub"]),
            email=payload["email"],
            name=payload["name"],
            image=payload.get("image"),
        )
    except (JWTError, KeyError, ValueError):
        return None
