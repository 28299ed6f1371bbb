"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.database import create_engine, create_sessionmaker, get_db, init_db
from app.exceptions import register_exception_handlers
from app.routers import customers, locations

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    await init_db(app.state.engine)
    logger.info("API available at: %s", settings.api_prefix)

    yield

    logger.info("Shutting down %s", settings.app_name)
    await app.state.engine.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application from ``settings`` (the environment by default)."""
    settings = settings or get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    ## Customer Locations API

    Manage customers and the locations they own.

    ### Entities:
    * **Customers**: name, email and phone, with their locations
    * **Locations**: addresses, each belonging to one customer
    """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url, echo=settings.database_echo)
    app.state.sessionmaker = create_sessionmaker(app.state.engine)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(customers.router, prefix=settings.api_prefix)
    app.include_router(locations.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check(db: AsyncSession = Depends(get_db)):
        """Health check endpoint, including a store round trip."""
        await db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )
