# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""System endpoints — health, readiness, metrics."""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from app.core.config import settings
from app.core.dependencies import get_family_repo
from app.repositories.family_repository import FamilyRepository
from app.schemas import HealthResponse

router = APIRouter(tags=["System"])


@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def readiness_check(repo: FamilyRepository = Depends(get_family_repo)):
    try:
        count = repo.verify_connection()
        return {"status": "ok", "service": settings.SERVICE_NAME, "families_in_db": count}
    except Exception as exc:
        return JSONResponse(
            status_code=503,
            content={"status": "degraded", "service": settings.SERVICE_NAME, "detail": str(exc)},
        )


@router.get("/metrics")
async def prometheus_metrics():
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
