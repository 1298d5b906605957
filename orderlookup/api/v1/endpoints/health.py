"""Health check endpoints. Used for liveness and readiness probes."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from orderlookup.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "No database configured", "model": ReadinessResponse}},
)
def readiness_check(request: Request) -> ReadinessResponse | JSONResponse:
    """Return 200 when the lookup service is wired to a database; 503 otherwise."""
    if getattr(request.app.state, "order_lookup_service", None) is not None:
        return ReadinessResponse(database=True)
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(status="not_ready", database=False).model_dump(),
    )
