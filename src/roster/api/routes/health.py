"""Health check endpoint."""

from fastapi import APIRouter

from roster import __version__
from roster.api.models import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Check that the API is up."""
    return HealthResponse(status="ok", version=__version__)
