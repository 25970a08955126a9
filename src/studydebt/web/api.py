"""FastAPI application factory.

Main entry point for the studydebt Web API.
"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studydebt import __version__
from studydebt.config.app_config import load_app_config
from studydebt.db.database import get_db_path, init_db
from studydebt.web.routes import (
    assignments_router,
    chapters_router,
    debt_router,
    health_router,
    lectures_router,
    questions_router,
    subtasks_router,
)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    logger.info("api_startup", db_path=str(get_db_path().absolute()))
    yield


def create_app(db_path: Path | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db_path: Database file; defaults to ``database.path`` from config

    Returns:
        Configured FastAPI app instance
    """
    config = load_app_config()
    init_db(db_path or config.database.path)

    app = FastAPI(
        title="Study Debt API",
        description="Study tracker with knowledge debt scoring",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware for web clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.api.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(health_router)
    app.include_router(lectures_router)
    app.include_router(chapters_router)
    app.include_router(assignments_router)
    app.include_router(subtasks_router)
    app.include_router(questions_router)
    app.include_router(debt_router)

    return app
