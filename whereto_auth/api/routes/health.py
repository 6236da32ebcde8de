"""Health check endpoint."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from whereto_auth import __version__

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Return API health status.

    Used by load balancers and monitoring systems to verify
    the service is running and responsive.
    """
    database = request.app.state.database
    db_status = "connected" if database is not None and database.is_connected else "none"
    return HealthResponse(status="ok", version=__version__, database=db_status)
