from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
import uvicorn

from src.core import exceptions
from src.core.config import Settings, settings as default_settings
from src.core.database import Database
from src.core.logger import get_logger, setup_logging
from src.core.response.handlers import (
    app_exception_handler,
    global_exception_handler,
    validation_exception_handler,
)
from src.core.security.tokens import IdentityResolver
from src.core.storage import LocalFileStorage

# Import routers from apps
from src.apps.accounts import auth_router
from src.apps.blog import post_router
from src.apps.uploads import upload_router

logger = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create database tables
    await app.state.database.create_all()
    logger.info("✅ Database tables ready")
    yield
    # Shutdown: Clean up resources
    await app.state.database.disconnect()
    logger.info("🔄 Shutting down...")


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; every shared collaborator is created here once."""
    app_settings = app_settings or default_settings
    setup_logging(app_settings.LOG_LEVEL)

    app = FastAPI(
        title=app_settings.PROJECT_NAME,
        description=app_settings.PROJECT_INFO,
        version=app_settings.PROJECT_VERSION,
        lifespan=lifespan,
    )

    app.state.settings = app_settings
    app.state.database = Database(
        app_settings.ASYNC_DATABASE_URL, echo=app_settings.DATABASE_ECHO
    )
    app.state.identity_resolver = IdentityResolver(
        secret=app_settings.SECRET_KEY,
        algorithm=app_settings.JWT_ALGORITHM,
        expire_minutes=app_settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    )
    app.state.storage = LocalFileStorage(
        app_settings.UPLOAD_FOLDER, url_prefix=app_settings.UPLOAD_URL_PREFIX
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Adjust in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    app.add_exception_handler(exceptions.AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # Health check endpoint
    @app.get("/", tags=["Health"])
    async def root():
        """Root endpoint with health check."""
        return {
            "message": "🚀 Server is running!",
            "status": "healthy",
            "version": app_settings.PROJECT_VERSION,
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "message": "Service is running normally"}

    # Include app routers
    app.include_router(auth_router)
    app.include_router(post_router)
    app.include_router(upload_router)

    app.mount(
        app_settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=app_settings.UPLOAD_FOLDER),
        name="uploads",
    )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,  # Enable auto-reload in development
        log_level="info",
    )
