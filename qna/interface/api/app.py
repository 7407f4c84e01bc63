"""FastAPI application."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from qna.adapter.notification import QueueNotificationDispatcher
from qna.config import Settings
from qna.interface.api.errors import DomainErrorMiddleware
from qna.interface.api.routes import (
    answers,
    health,
    notifications,
    questions,
    tags,
    users,
    votes,
)
from qna.util.di.container import create_container, setup_di
from qna.util.observability import instrument_fastapi


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run the notification dispatcher for the lifetime of the app."""
    container: AsyncContainer = app.state.dishka_container
    dispatcher = await container.get(QueueNotificationDispatcher)
    dispatcher.start()
    try:
        yield
    finally:
        await dispatcher.stop()
        await container.close()


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container is built
            when omitted (tests pass one with mock providers)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Q&A API",
        description="Backend API for a community question and answer site",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Instrument FastAPI for automatic tracing of HTTP requests
    instrument_fastapi(app_instance)

    # Setup dependency injection
    # Settings are loaded from environment automatically
    if container is None:
        container = create_container()
    setup_di(app_instance, container)

    # Added after DI so it wraps the container middleware
    app_instance.add_middleware(DomainErrorMiddleware)

    # Setup CORS middleware (outermost, so error responses carry CORS headers)
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=[
            "Authorization",
            "Content-Type",
            "Accept",
            "Origin",
            "User-Agent",
            "Cache-Control",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    # Register routes
    app_instance.include_router(health.router)
    app_instance.include_router(questions.router)
    app_instance.include_router(answers.router)
    app_instance.include_router(votes.router)
    app_instance.include_router(notifications.router)
    app_instance.include_router(tags.router)
    app_instance.include_router(users.router)

    return app_instance
