"""NoReply API: FastAPI entry point.

Registers middleware, routers, error handlers and lifecycle hooks. The
calculators live under /api/tools/ and letter generation under
/api/generate/.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.middleware import RequestIdMiddleware
from core.config import get_settings
from core.observability.logging_setup import configure_logging
from core.observability.otel_setup import setup_otel
from letters.router import router as letters_router
from rights.errors import ConfigurationError, InputValidationError
from rights.router import router as rights_router

logger = logging.getLogger(__name__)

settings = get_settings()


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup/shutdown hooks."""
    configure_logging(settings.log_level)
    setup_otel(service_name="noreply", endpoint=settings.otel_endpoint)

    logger.info(
        "%s API started (letter service %s)",
        settings.app_name,
        "configured" if settings.anthropic_api_key else "not configured, templates only",
    )
    yield
    logger.info("%s API shutting down", settings.app_name)


# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    description="Consumer-rights calculators and complaint letter generation",
    version=settings.version,
    debug=settings.debug,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request id
app.add_middleware(RequestIdMiddleware)


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------

@app.exception_handler(InputValidationError)
async def input_validation_error(request: Request, exc: InputValidationError):
    return JSONResponse(status_code=422, content={"error": exc.message, "field": exc.field})


@app.exception_handler(ConfigurationError)
async def configuration_error(request: Request, exc: ConfigurationError):
    logger.error("Rule table configuration error: %s", exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(rights_router, prefix="/api/tools", tags=["Tools"])
app.include_router(letters_router, prefix="/api/generate", tags=["Letters"])


# ---------------------------------------------------------------------------
# Health & root
# ---------------------------------------------------------------------------

@app.get("/health")
async def health():
    return {"status": "healthy", "version": settings.version}


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": settings.version,
        "docs": "/docs",
        "tools": ["vehicle-rights", "warranty-check", "parking-appeal", "energy-complaint"],
        "letters": "/api/generate/letter-type",
    }
