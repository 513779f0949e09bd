import logging
from typing import Optional

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config.database import Database
from app.config.settings import Settings, get_settings
from app.core.errors import setup_exception_handlers
from app.core.logging_config import setup_logging
from app.core.middleware import setup_middleware
from app.api.v1.router import api_router

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    # Startup
    logger.info("🚀 TechStore API Starting...")
    logger.info(f"📍 Version: {settings.version}")
    logger.info(f"🌍 Environment: {'Development' if settings.debug else 'Production'}")
    logger.info(f"🗄️ Database: {app.state.database.dialect_name}")
    logger.info(f"📦 Stock decrement: {settings.stock_decrement_mode} / floor: {settings.stock_floor_policy}")

    yield

    # Shutdown
    app.state.database.dispose()
    logger.info("🛑 TechStore API Shutting down...")

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        description="Sistema de gestión de ventas para tienda de electrónicos",
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        lifespan=lifespan
    )

    # Cliente de base de datos: uno por proceso, liberado en el shutdown
    app.state.settings = settings
    app.state.database = Database(settings.sqlalchemy_database_url, echo=settings.debug)

    # Setup middleware
    setup_middleware(app, settings)
    setup_exception_handlers(app)

    # Include routers
    app.include_router(api_router, prefix="/api/v1")

    # Root endpoint
    @app.get("/")
    async def root():
        return {
            "message": "🚀 TechStore API - Gestión de ventas",
            "version": settings.version,
            "status": "running",
            "docs": "/docs" if settings.debug else "Disabled in production",
            "api": "/api/v1"
        }

    return app

if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
