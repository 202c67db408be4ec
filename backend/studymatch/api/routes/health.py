"""Health Probe: liveness endpoint for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up
    - Reports store sizes so an operator can see the in-memory state is alive
"""

import logging
from fastapi import APIRouter, Depends, status

from studymatch.api.dependencies import get_stores
from studymatch.infrastructure.memory_store import StoreManager

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check(stores: StoreManager = Depends(get_stores)):
    """Basic liveness probe."""
    return {
        "status": "healthy",
        "service": "studymatch-api",
        "users": len(stores.users.all()),
        "requests": len(stores.requests.all()),
    }
