"""
Main FastAPI application for the DIVA document generator.
Handles CORS, request logging middleware, lifespan events, error mapping,
and router registration.
"""
import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from diva.config import settings
from diva.exceptions import SerializationError, UpstreamProviderError, ValidationError
from diva.models.schemas import ErrorResponse
from diva.routers import convert, generate, health

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting DIVA backend …")
    logger.info("=" * 60)

    if settings.OPENAI_API_KEY:
        logger.info("✓ Text generation: %s (%s)", settings.OPENAI_MODEL, settings.OPENAI_BASE_URL)
    else:
        logger.warning(
            "⚠ OPENAI_API_KEY is not set — /api/generate-markdown and /api/generate "
            "will fail; /api/convert-to-docx still works."
        )

    logger.info("=" * 60)
    logger.info("  DIVA backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Health     : http://%s:%d/api/health", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="DIVA API",
    description=(
        "**DIVA** — developer and user guide generator.\n\n"
        "Describe a project, let the text-generation provider write the "
        "guide as Markdown, and download it as a styled Word document.\n\n"
        "Key endpoints:\n"
        "- `POST /api/generate-markdown` — form fields → Markdown guide\n"
        "- `POST /api/convert-to-docx` — Markdown + form fields → .docx\n"
        "- `POST /api/generate` — form fields → .docx in one call\n"
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Skip noisy health-check polling from the frontend
    if request.url.path not in ("/api/health/", "/"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error(status_code: int, error: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, details=list(details or []))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return _error(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)


@app.exception_handler(UpstreamProviderError)
async def upstream_error_handler(request: Request, exc: UpstreamProviderError):
    logger.error("%s %s: text generation failed — %s", request.method, request.url.path, exc.message)
    return _error(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Failed to generate markdown content",
        [exc.message, *exc.details],
    )


@app.exception_handler(SerializationError)
async def serialization_error_handler(request: Request, exc: SerializationError):
    logger.error("%s %s: %s %s", request.method, request.url.path, exc.message, exc.details)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message, exc.details)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc),
            "path": str(request.url.path),
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,   prefix="/api/health", tags=["Health"])
app.include_router(generate.router, prefix="/api",        tags=["Generate"])
app.include_router(convert.router,  prefix="/api",        tags=["Convert"])


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------

@app.get("/", tags=["Root"], include_in_schema=False)
async def root():
    """API root — returns basic service info."""
    return {
        "name": "DIVA API",
        "version": "0.1.0",
        "description": "Developer and User Guide Generator",
        "docs": "/docs",
        "health": "/api/health",
        "endpoints": {
            "generate_markdown": "/api/generate-markdown",
            "convert_to_docx": "/api/convert-to-docx",
            "generate": "/api/generate",
        },
    }


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "diva.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
