"""Maps service error tags to HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from whereto_auth.domain.errors import AuthError, ErrorCode

logger = logging.getLogger(__name__)

GENERIC_LOGIN_FAILURE = "Invalid email or password"
GENERIC_RESET_MESSAGE = "If an account with that email exists, a password reset link has been sent."
SERVER_ERROR = "Internal server error"

# Both login failures share one message so responses don't reveal which emails exist
STATUS_BY_CODE: dict[ErrorCode, tuple[int, str | None]] = {
    ErrorCode.MISSING_CREDENTIALS: (status.HTTP_400_BAD_REQUEST, None),
    ErrorCode.USER_NOT_FOUND: (status.HTTP_401_UNAUTHORIZED, GENERIC_LOGIN_FAILURE),
    ErrorCode.INVALID_PASSWORD: (status.HTTP_401_UNAUTHORIZED, GENERIC_LOGIN_FAILURE),
    ErrorCode.USER_ALREADY_EXISTS: (status.HTTP_400_BAD_REQUEST, None),
    ErrorCode.EMAIL_ALREADY_TAKEN: (status.HTTP_400_BAD_REQUEST, None),
    ErrorCode.INVALID_OR_EXPIRED_TOKEN: (status.HTTP_400_BAD_REQUEST, None),
    ErrorCode.WEAK_PASSWORD: (status.HTTP_400_BAD_REQUEST, None),
    ErrorCode.HASHING_FAILED: (status.HTTP_500_INTERNAL_SERVER_ERROR, SERVER_ERROR),
}


async def auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    status_code, message = STATUS_BY_CODE[exc.code]
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.code.value)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.code.value)
    return JSONResponse(status_code=status_code, content={"detail": message or exc.detail})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s", request.method, request.url.path, exc_info=exc
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": SERVER_ERROR},
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AuthError, auth_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
