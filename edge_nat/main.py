"""
Main FastAPI application entry point.
"""
import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from edge_nat import __version__
from edge_nat.core.config import settings
from edge_nat.core.directory import configured_gateway_directory
from edge_nat.core.logging_config import setup_logging
from edge_nat.api.v1.router import api_router
from edge_nat.middleware.request_logging import RequestLoggingMiddleware

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    logger.info(f"Starting up {settings.APP_NAME} API...")
    nat_range = settings.id_range("nat")
    logger.info(f"NAT rule ids are allocated from {nat_range.minimum}..{nat_range.maximum}")

    # Load the gateway directory eagerly so a bad file shows up in the startup log
    try:
        directory = configured_gateway_directory()
        if directory is None:
            logger.warning("GATEWAY_DIRECTORY_FILE not set; NAT compilation requests will return 503")
        else:
            logger.info(f"Gateway directory ready ({len(directory.gateway_ids())} gateways)")
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load gateway directory: {e}", exc_info=True)

    yield
    logger.info(f"Shutting down {settings.APP_NAME} API...")


app = FastAPI(
    title="Edge NAT Compiler API",
    description="Compile NAT rule intents into edge gateway NatService configuration",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# Request logging middleware (must be added before other middleware)
app.add_middleware(RequestLoggingMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors with trace_id."""
    if isinstance(exc, HTTPException):
        raise exc

    trace_id = getattr(request.state, "trace_id", str(uuid.uuid4()))
    logger.error(
        f"[{trace_id}] Unhandled exception: {type(exc).__name__}: {exc}",
        exc_info=True
    )
    return JSONResponse(
        status_code=500,
        content={
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
            "trace_id": trace_id,
            "error": type(exc).__name__,
        },
    )


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"{settings.APP_NAME} API",
        "version": __version__,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Liveness check; returns 200 without touching the gateway directory."""
    return {"status": "ok"}
