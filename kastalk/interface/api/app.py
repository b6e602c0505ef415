"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from kastalk.config import Settings
from kastalk.interface.error import request_validation_handler
from kastalk.interface.api.routes import (
    comments,
    health,
    posts,
    users,
    votes,
)
from kastalk.util.di.container import create_container, setup_di
from kastalk.util.observability import instrument_fastapi


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Create FastAPI application.

    Note: Logfire should be configured before calling this function.
    In production, start_app.py handles this.

    Args:
        container: DI container to use; the production container is built
            when omitted (tests pass one wired with in-memory repositories)
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Kastalk API",
        description="Backend API for Kastalk - wallet-authenticated posts, threaded comments and votes",
        version="0.1.0",
    )

    instrument_fastapi(app_instance)

    app_instance.add_exception_handler(
        RequestValidationError, request_validation_handler
    )

    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=[
            settings.api.frontend_url,
            "http://localhost:3000",  # Local development
            "http://localhost:5173",  # Vite default
        ],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Wallet-Address",
            "X-Requested-With",
        ],
        expose_headers=["Content-Length", "Content-Type"],
        max_age=600,  # Cache preflight requests for 10 minutes
    )

    setup_di(app_instance, container or create_container())

    app_instance.include_router(health.router)
    app_instance.include_router(users.router)
    app_instance.include_router(posts.router)
    app_instance.include_router(comments.router)
    app_instance.include_router(votes.router)

    return app_instance
