# portal/main.py
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portal.core.config import get_settings
from portal.core.errors import (
    AuthenticationError,
    BackendError,
    ConflictError,
    NotFoundError,
    NotificationError,
    PortalError,
    ValidationError,
)
from portal.services import banner

# Routers
from portal.routers.session import router as session_router
from portal.routers.auth import router as auth_router
from portal.routers.onboarding import router as onboarding_router
from portal.routers.dashboard import router as dashboard_router
from portal.routers.admin import router as admin_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("uvicorn")

# HTTP status per error kind; the body is always an error banner
_ERROR_STATUS: dict[type[PortalError], int] = {
    ValidationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    ConflictError: status.HTTP_409_CONFLICT,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    BackendError: status.HTTP_502_BAD_GATEWAY,
    NotificationError: status.HTTP_502_BAD_GATEWAY,
}


app = FastAPI(
    title=settings.PROJECT_NAME,
    version="0.1.0",
)


@app.exception_handler(PortalError)
async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
    code = _ERROR_STATUS.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(
        status_code=code,
        content={"banner": banner.error(exc.message).model_dump()},
    )


# --- CORS configuration ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(session_router, prefix=settings.API_V1_STR)
app.include_router(auth_router, prefix=settings.API_V1_STR)
app.include_router(onboarding_router, prefix=settings.API_V1_STR)
app.include_router(dashboard_router, prefix=settings.API_V1_STR)
app.include_router(admin_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "sdc-portal"}
