"""Health check endpoint."""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health(request: Request):
    """Health check endpoint with MongoDB status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }

    mongo = getattr(request.app.state, "mongo", None)
    if mongo is not None and mongo.ping():
        health_status["services"]["mongodb"] = {
            "status": "healthy",
            "message": "Connection successful"
        }
        status_code = status.HTTP_200_OK
    else:
        health_status["services"]["mongodb"] = {
            "status": "unhealthy",
            "message": "Connection failed or not configured"
        }
        health_status["status"] = "degraded"
        status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(content=health_status, status_code=status_code)
