import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src.accounts.api.v1.envelopes import describe_validation_errors, envelope
from src.accounts.api.v1.routes_auth import router as auth_router_v1
from src.accounts.api.v1.routes_system import router as system_router_v1
from src.accounts.config import settings
from src.accounts.infra.db.bootstrap import init_sql_repositories

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Accounts API")


@app.on_event("startup")
async def on_startup() -> None:
    """Application startup hook.

    When USE_SQL_REPOS is enabled and a DATABASE_URL is configured, this
    switches the account service to the SQL-backed user store. In other
    environments (tests, local dev without a database), this is a no-op and
    the in-memory store remains active.
    """

    init_sql_repositories()


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or ill-typed fields answer with the same envelope as every
    # other rejected request.
    return envelope(
        status.HTTP_400_BAD_REQUEST,
        success=False,
        message=describe_validation_errors(exc.errors()),
    )


# CORS configuration – permissive by default for development. Tighten via
# CORS_ALLOW_ORIGINS in production deployments.
allow_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()] or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health", tags=["system"])
async def health_check() -> dict:
    """Basic liveness check for the API root."""
    return {"status": "ok"}


# Versioned API routers
app.include_router(system_router_v1, prefix="/api/v1")
app.include_router(auth_router_v1, prefix="/api/v1")

# Uploaded profile pictures; the directory is created on first upload.
app.mount(
    settings.profile_pic_url_prefix,
    StaticFiles(directory=settings.profile_pic_upload_dir, check_dir=False),
    name="uploads",
)
