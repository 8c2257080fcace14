"""FastAPI application for the SmartShodhai stock service."""
from datetime import datetime, timezone

from fastapi import Depends, FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.deps import verify_auth
from .api.v1 import api_router
from .config import settings
from .error_handlers import (
    AppException, app_exception_handler, generic_exception_handler, validation_exception_handler
)
from .logging_config import setup_logging
from .middleware import (
    RequestLoggingMiddleware, http_exception_handler, limiter, rate_limit_exceeded_handler
)
from .schemas import HealthCheck

logger = setup_logging(settings.log_level, settings.log_dir, settings.log_to_file)

app = FastAPI(title=settings.app_name, version=settings.app_version, debug=settings.debug)
app.state.limiter = limiter


@app.get("/health", response_model=HealthCheck)
def health():
    return HealthCheck(status="ok", version=settings.app_version, timestamp=datetime.now(timezone.utc))


# Everything under /api/v1 requires basic auth
app.include_router(api_router, dependencies=[Depends(verify_auth)])

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_methods=["*"],
    allow_headers=["*"]
)

app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(Exception, generic_exception_handler)

logger.info(f"[STARTUP] {settings.app_name} v{settings.app_version} ready")
