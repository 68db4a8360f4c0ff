"""
Health Endpoint Module.

This module defines the `/health` endpoint used for application health
checks. External keep-warm pingers hit it periodically so an idle host
does not cold-start; it reports the uptime alongside the status.
"""

import time

from fastapi import APIRouter, Request

from app.utils.clock import utc_timestamp

router = APIRouter(
    prefix="/health",
    tags=['health']
)


@router.get("", summary="Health Check", response_description="Health status of the API")
async def health_check(request: Request) -> dict:
    """
    Perform a basic health check.

    Returns a JSON response with:
    - `status`: Static string `"healthy"` indicating the API is alive.
    - `timestamp`: Current UTC timestamp in ISO 8601 format.
    - `uptime`: Seconds elapsed since the application object was created.
    """
    return {
        "status": "healthy",
        "timestamp": utc_timestamp(),
        "uptime": time.monotonic() - request.app.state.started_at,
    }
