"""
Mentor Chat - Main Application Entry Point

Mentee-mentor chat rooms with AI-assisted question answering.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from mentorchat import __version__
from mentorchat.core.config import get_settings
from mentorchat.core.exceptions import ChatError
from mentorchat.core.logger import logger
from mentorchat.models.response import ErrorResponse


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info(f"Starting Mentor Chat in {settings.ENVIRONMENT} mode...")

    if settings.is_local:
        from mentorchat.infrastructure.local.database import init_db

        await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Mentor Chat...")
    from mentorchat.api.deps import get_similarity_client
    from mentorchat.infrastructure.local.database import dispose_db

    await get_similarity_client().close()
    await dispose_db()


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Render a ChatError as a stable code and message, never internals."""
    if exc.code.status_code >= 500:
        logger.error(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind.value} on {request.method} {request.url.path}: {exc.message}")
    body = ErrorResponse(
        code=exc.code.status_code,
        kind=exc.kind.value,
        error=exc.code.name,
        message=exc.code.message,
    )
    return JSONResponse(status_code=exc.code.status_code, content=body.model_dump())


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Mentor Chat",
        description="Mentee-mentor chat backend with AI-assisted question answering",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_exception_handler(ChatError, chat_error_handler)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    from mentorchat.api import chat

    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "environment": settings.ENVIRONMENT,
            "version": __version__,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
