"""Health check routes."""

from fastapi import APIRouter

router = APIRouter()


@router.get("/")
@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check() -> dict[str, str]:
    """Readiness check endpoint.

    Returns:
        Readiness status.
    """
    return {"status": "ready"}
