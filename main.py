# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
PollyTrack
==========
Tracks household pet-care tasks (walks, feeding, medicine, ...) across the
members of a family and texts everyone else when a task gets done.

Port: 5000 (PORT)
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.controllers import family_controller, system_controller
from app.core.config import settings
from app.core.dependencies import get_family_repo
from app.core.errors import ServiceError
from app.core.logging import get_logger
from app.middleware import MetricsMiddleware, RequestIDMiddleware
from app.schemas import ErrorResponse

logger = get_logger("pollytrack")


@asynccontextmanager
async def lifespan(application: FastAPI):
    repo = get_family_repo()
    try:
        repo.ensure_schema()
        logger.info("PollyTrack server running on port %d — %d families in store",
                    settings.PORT, repo.count_all())
    except Exception:
        logger.warning("Could not prepare the families table — store may not be ready yet")
    yield
    repo.dispose()
    logger.info("Shutting down — connection pool disposed")


app = FastAPI(
    title="PollyTrack",
    description="Household pet-care task tracking with SMS notifications.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        400: {"model": ErrorResponse, "description": "Validation error"},
        404: {"model": ErrorResponse, "description": "Family, task or member not found"},
    },
)

app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(request: Request, status_code: int, error: str, detail=None) -> JSONResponse:
    req_id = getattr(request.state, "request_id", None)
    body = ErrorResponse(error=error, detail=detail, request_id=req_id)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ServiceError)
async def service_exception_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("Service error: %s", exc.message, extra={"request_id": getattr(request.state, "request_id", None)})
    return _error(request, exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(p) for p in err['loc'] if p != 'body')}: {err['msg']}"
        for err in exc.errors()
    ]
    return _error(request, 400, "; ".join(messages) or "Invalid request body")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return _error(request, 500, "internal_server_error", str(exc))


app.include_router(system_controller.router)
app.include_router(family_controller.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, log_level="info")
