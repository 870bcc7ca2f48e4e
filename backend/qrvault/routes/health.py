"""
QRVault Backend — Health Check Route
======================================

What:  Liveness endpoint for container health checks and load balancers.
How:   Answers 200 {"status": "healthy"} whenever the process can serve HTTP.

No dependency is probed; database failures surface as 500s on the real
endpoints instead.
"""

from fastapi import APIRouter

from qrvault.schemas.qr_code import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    """Always healthy while the process is up."""
    return HealthResponse(status="healthy")
