import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from meta_auditor.config import settings
from meta_auditor.database import Base, engine
from meta_auditor.exception_handlers import register_exception_handlers
from meta_auditor.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from meta_auditor.plugins.loader import initialize_plugins
from meta_auditor.plugins.registry import plugin_registry
from meta_auditor.routes import auditor, installer
from meta_auditor.utils.security import NonceManager

setup_structured_logging(settings.log_level, settings.log_json)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info(f"Starting {settings.app_name} {settings.app_version} ({settings.environment})")
    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    await initialize_plugins(plugin_registry)

    yield

    logger.info("Shutting down the application...")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="SEO metadata audit report for CMS content",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # Installer links are signed with the application secret
    app.state.nonce_manager = NonceManager(settings.secret_key)

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    app.include_router(auditor.router)
    app.include_router(installer.router)

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": f"Welcome to the {settings.app_name}"}

    @app.get("/health", tags=["Root"])
    async def health():
        return {"status": "ok", "version": settings.app_version}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=settings.debug)
