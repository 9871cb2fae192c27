import json
import logging
import time
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from sqlalchemy import text
from sqlalchemy.orm import Session

from growtrack.config import settings
from growtrack.database import get_db
from growtrack.procedures import ErrorCode, ProcedureError
from growtrack.routers import (
    auth_router, batches_router, dashboard_router, genetics_router, plants_router,
)
from growtrack.routers.auth import limiter

logger = logging.getLogger("growtrack.api")
logging.basicConfig(level=settings.log_level.upper())

ERROR_STATUS = {
    ErrorCode.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.PRECONDITION_FAILED: status.HTTP_412_PRECONDITION_FAILED,
    ErrorCode.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

app = FastAPI(
    title="Growtrack API",
    description="Cultivation tracking: genetics, batches and plants",
    version="1.0.0",
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type"],
)


@app.exception_handler(ProcedureError)
async def procedure_error_handler(request: Request, exc: ProcedureError):
    if exc.code == ErrorCode.INTERNAL and exc.cause is not None:
        logger.error("%s %s failed: %r", request.method, request.url.path, exc.cause)
    return JSONResponse(
        status_code=ERROR_STATUS[exc.code],
        content={"detail": exc.message, "code": exc.code.value},
    )


@app.middleware("http")
async def add_security_headers(request: Request, call_next):
    """Set basic security headers for all API responses."""
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
    return response


@app.middleware("http")
async def structured_logging_middleware(request: Request, call_next):
    start = time.perf_counter()
    req_id = request.headers.get("X-Request-ID", str(uuid4()))
    request.state.request_id = req_id

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = req_id
        return response
    finally:
        payload = {
            "request_id": req_id,
            "path": request.url.path,
            "method": request.method,
            "status": status_code,
            "duration_ms": round((time.perf_counter() - start) * 1000, 2),
        }
        logger.info(json.dumps(payload, default=str))


# Include routers
app.include_router(auth_router)
app.include_router(genetics_router)
app.include_router(batches_router)
app.include_router(plants_router)
app.include_router(dashboard_router)

Instrumentator().instrument(app).expose(app, include_in_schema=False, should_gzip=True)


@app.get("/health")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for Docker."""
    try:
        db.execute(text("SELECT 1"))
    except Exception:
        logger.exception("Health check could not reach the database")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "degraded", "db": "error"},
        )
    return {"status": "healthy", "db": "ok"}


@app.get("/")
def root():
    """Root endpoint with API information."""
    return {
        "name": "Growtrack API",
        "version": "1.0.0",
        "docs": "/docs",
        "auth": {"login": "/auth/login"},
        "resources": ["/genetics", "/batches", "/plants", "/dashboard"],
    }
