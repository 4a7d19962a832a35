import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from devpanel.core.config import settings
from devpanel.routers import children as children_router
from devpanel.routers import migration as migration_router
from devpanel.routers import settings as settings_router
from devpanel.routers import stats as stats_router
from devpanel.core.errors import (
    DevPanelException,
    devpanel_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Development Panel API",
    description=(
        "**Child development progress scoring**\n\n"
        "Aggregates daily per-category scores under configurable cancel and veto "
        "rules and reports achievement over trailing evaluation periods.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(DevPanelException, devpanel_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(stats_router.router)
app.include_router(settings_router.router)
app.include_router(migration_router.router)
app.include_router(children_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """
    Returns `{"status": "ok"}` when the API is up.
    Used by Railway / Render for liveness probes.
    """
    return {"status": "ok", "env": settings.APP_ENV}
