"""
Main FastAPI application for the Event Matching API.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import settings
from app.core.database import init_db
from app.core.logging import configure_logging, get_logger
from app.core.middleware import CorrelationIdMiddleware
from app.api.routes import matching
from app.services.matching.sports_config import ALL_SPORT_CODES, SPORT_CODES

# Configure structured logging with JSON formatter
configure_logging(
    level=settings.LOG_LEVEL,
    json_output=settings.LOG_JSON  # Set LOG_JSON=false for colored output in development
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan events."""
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")

    # Creates team_mappings / match_failures if missing
    init_db()
    logger.info("Application started")

    yield

    logger.info("Shutting down application")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Canonical team resolution and prediction market to sportsbook event matching",
    lifespan=lifespan
)

# Add correlation ID middleware (must be added before CORS for proper header handling)
app.add_middleware(CorrelationIdMiddleware)

# Initialize Prometheus metrics BEFORE including routes
instrumentator = Instrumentator()
instrumentator.instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)
logger.info("Prometheus metrics initialized at /metrics")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API v1
app.include_router(matching.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "sports": SPORT_CODES,
        "extended_sports": [code for code in ALL_SPORT_CODES if code not in SPORT_CODES],
        "endpoints": {
            "api_version": "v1",
            "matching": {
                "resolve": "/api/v1/matching/resolve",
                "fuzzy": "/api/v1/matching/fuzzy",
                "index_stats": "/api/v1/matching/index-stats",
                "match": "/api/v1/matching/match",
                "failures": "/api/v1/matching/failures",
                "mappings": "/api/v1/matching/mappings/{sport_code}"
            },
            "docs": "/docs",
            "health": "/health",
            "metrics": "/metrics"
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.APP_VERSION
    }


# Exception handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "detail": str(exc)}
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG
    )
