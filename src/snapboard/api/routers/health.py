"""
Health check endpoint.
"""

from datetime import datetime, timezone
from fastapi import APIRouter

from ..models import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Liveness probe.
    
    Returns:
        Static status and the current time
    """
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    )
