"""PriceCompare Backend -- FastAPI Application Entry Point."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pricecompare import __version__
from pricecompare.api.v1.router import api_v1_router
from pricecompare.config import settings
from pricecompare.core.exceptions import InvalidQueryError
from pricecompare.schemas import ErrorDetail, ErrorResponse
from pricecompare.scrapers.register_adapters import register_all_adapters

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    logger.info("Starting PriceCompare API server...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")

    # Register all source adapters
    register_all_adapters()

    # Pooled client shared by adapters; each call still carries its own timeout
    app.state.http_client = httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        follow_redirects=True,
    )

    yield

    logger.info("Shutting down PriceCompare API server...")
    await app.state.http_client.aclose()


app = FastAPI(
    title="PriceCompare API",
    description="Price comparison across Indian e-commerce sites",
    version=__version__,
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        settings.FRONTEND_URL,
        "http://localhost:5173",
        "http://localhost:8080",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(InvalidQueryError)
async def invalid_query_handler(request: Request, exc: InvalidQueryError):
    """Input errors are reported before any upstream is contacted."""
    body = ErrorResponse(error=ErrorDetail(code="invalid_query", message=exc.message, field="query"))
    return JSONResponse(status_code=400, content=body.model_dump(exclude_none=True))


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """Unclassified faults become a generic 500 with no partial data."""
    logger.error(f"Unhandled error on {request.url.path}: {exc}", exc_info=True)
    body = ErrorResponse(error=ErrorDetail(code="internal_error", message="Internal server error"))
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


# Register API v1 router
app.include_router(api_v1_router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": "PriceCompare API",
        "version": __version__,
        "description": "Price comparison across Indian e-commerce sites",
        "docs": "/docs" if settings.DEBUG else None,
        "health": "/api/v1/health",
        "compare": "/api/v1/compare",
    }
