"""
StockFlow - Warehouse Inventory Management
FastAPI Application Entry Point
"""
import logging
import uvicorn
from fastapi import FastAPI
from contextlib import asynccontextmanager
from typing import Optional
from sqlalchemy.orm import sessionmaker

from stockflow.core import (
    get_settings, Settings, Base, create_db_engine, create_session_factory, setup_logging
)
from stockflow.api.errors import register_exception_handlers
from stockflow.api.router import api_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, session_factory: Optional[sessionmaker] = None) -> FastAPI:
    """
    Build the application.

    Tests pass their own settings and a session factory bound to a throwaway
    database; otherwise both come from the environment.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    if session_factory is None:
        session_factory = create_session_factory(create_db_engine(settings), settings)
    elif not session_factory.kw.get("info", {}).get("settings"):
        session_factory.configure(info={**session_factory.kw.get("info", {}), "settings": settings})

    # Lifespan for startup/shutdown
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: Create tables if not exist
        Base.metadata.create_all(bind=session_factory.kw["bind"])
        logger.info(f"{settings.APP_NAME} starting on port {settings.APP_PORT}")
        yield
        logger.info(f"{settings.APP_NAME} shutting down")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Receipts, Deliveries, Transfers & Stock Ledger",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.session_factory = session_factory

    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api")

    # Health check
    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "app": settings.APP_NAME}

    return app


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "main:create_app",
        factory=True,
        host="0.0.0.0",
        port=settings.APP_PORT,
        reload=settings.DEBUG
    )
