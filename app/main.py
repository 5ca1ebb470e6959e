"""
Main FastAPI application.

Company culture comparison API: browsing and scoring, reviews, salaries,
jobs and news, user favorites, and the LLM-backed assistant features.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import get_settings
from app.core.database import check_connection, create_tables
from app.api.v1 import (
    auth,
    chatbot,
    companies,
    comparison,
    comparisons,
    demo,
    favorites,
    glassdoor,
    jobs,
    linkedin_jobs,
    news,
    recommendations,
    reviews,
    salary,
)

SERVICE_NAME = "CultureScope API"
VERSION = "0.1.0"

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Runs on startup and shutdown.
    """
    settings = get_settings()
    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"Starting {SERVICE_NAME}")
    logger.info(f"Log level: {settings.log_level}")

    try:
        create_tables()
        logger.info("Database tables ready")
    except Exception as e:
        logger.error(f"Failed to create tables: {e}")
        raise

    yield

    logger.info("Shutting down")


app = FastAPI(
    title=SERVICE_NAME,
    description="Compare company culture scores, salaries, reviews and openings",
    version=VERSION,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for module in (
    auth,
    companies,
    jobs,
    news,
    favorites,
    comparisons,
    reviews,
    salary,
    recommendations,
    comparison,
    glassdoor,
    demo,
    linkedin_jobs,
    chatbot,
):
    app.include_router(module.router, prefix="/api/v1")


@app.get("/")
def root():
    """Root endpoint with service info."""
    return {
        "service": SERVICE_NAME,
        "version": VERSION,
        "docs": "/docs"
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint.

    Returns status of the service and database connectivity.
    """
    health_status = {
        "status": "healthy",
        "service": "running",
        "database": "unknown"
    }

    try:
        check_connection()
        health_status["database"] = "connected"
    except Exception as e:
        health_status["status"] = "degraded"
        health_status["database"] = f"error: {str(e)}"
        logger.warning(f"Database health check failed: {e}")

    return health_status
