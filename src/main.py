"""FastAPI application entry point."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.api import auth
from src.api.middleware import register_middleware
from src.config import get_settings
from src.database import init_db
from src.errors import register_exception_handlers

settings = get_settings()


def configure_logging() -> None:
    """Send application logs to stdout at the configured level."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s - %(message)s",
        stream=sys.stdout,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown events."""
    # Startup: fail fast if the database is unreachable
    init_db()
    yield


configure_logging()

app = FastAPI(
    title="User Auth API",
    description="User registration, login and session tokens",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)
register_middleware(app)

# Register routers
app.include_router(auth.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "environment": settings.environment}
