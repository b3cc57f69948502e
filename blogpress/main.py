"""FastAPI application factory."""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blogpress.config import get_settings
from blogpress.domain.exceptions import PublicationError
from blogpress.infrastructure.database.session import engine, init_database
from blogpress.infrastructure.logging.log_config import setup_logging
from blogpress.presentation.api.errors import error_body, status_for
from blogpress.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: configure logging and create tables."""
    setup_logging()
    await init_database()
    logger.info("Database ready")

    yield

    await engine.dispose()


async def _publication_error_handler(request: Request, exc: PublicationError) -> JSONResponse:
    """Errors raised from dependencies (e.g. authentication) before an endpoint runs."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"detail": error_body(exc.kind, exc.message, exc.hint)},
    )


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies as 400 with the standard error body."""
    problems = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
        for err in exc.errors()
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": error_body(
                "validation_error",
                problems or "Invalid request",
                "Check the request fields and try again.",
            )
        },
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PublicationError, _publication_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "blogpress.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
