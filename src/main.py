"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api import auth, evaluations, items, users
from src.api.errors import register_error_handlers
from src.config import Settings, get_settings
from src.database import create_db_engine, create_session_factory, init_db

logger = logging.getLogger(__name__)


def create_app(settings: Settings) -> FastAPI:
    """Build the application around an explicit settings object."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Handle application startup and shutdown events."""
        # A database that cannot be reached at boot is fatal
        init_db(engine)
        Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
        logger.info(f"Database ready; serving uploads from {settings.upload_dir}")
        yield
        engine.dispose()

    app = FastAPI(
        title="TrustMe API",
        description="Item authenticity verification: submissions, reviews and public verdicts",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app, expose_details=settings.is_development)

    # Register routers
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(items.router)
    app.include_router(evaluations.router)

    app.mount(
        settings.uploads_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy", "environment": settings.environment}

    return app


app = create_app(get_settings())
