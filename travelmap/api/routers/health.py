from fastapi import APIRouter, Depends

from travelmap.api.deps import get_health_service
from travelmap.schemas.common import ErrorResponse, OkResponse
from travelmap.services.health import HealthService

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=OkResponse, summary="Liveness probe")
async def healthz():
    return {"ok": True}


@router.get(
    "/readyz",
    response_model=OkResponse,
    summary="Readiness probe",
    description="Runs SELECT 1 against the location database.",
    responses={503: {"model": ErrorResponse, "description": "database unavailable"}},
)
async def readyz(svc: HealthService = Depends(get_health_service)):
    return await svc.ok()
