from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from src.marketplace.api.http.app_data import ApplicationDependencies
from src.marketplace.api.http.deps import get_app_dependencies

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health() -> dict:
    """Liveness probe; never touches the database."""
    return {"status": "healthy", "service": "marketplace-api"}


@router.get("/ready")
def ready(deps: ApplicationDependencies = Depends(get_app_dependencies)):
    """Readiness probe; reports 503 until the database answers."""
    if not deps.database_service.health_check():
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "checks": {"database": "unhealthy"}},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
