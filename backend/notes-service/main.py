"""GitHub Notes Service application entry point.

Assembles the FastAPI application: database tables, CORS, domain error
handlers and the REST routers.
"""

import logging
from contextlib import asynccontextmanager

from application.rest.error_handlers import register_exception_handlers
from application.rest.routers import router_health, router_notes, router_profile
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# ORM modules must be imported so their tables are registered on Base.metadata
from infrastructure.models import associations, note_orm, pull_request_orm  # noqa: F401
from infrastructure.models import user_profile_orm  # noqa: F401
from infrastructure.models.base import Base
from utils.config import CORS_ORIGINS, PORT
from utils.dependencies import engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Creating database tables")
    Base.metadata.create_all(bind=engine)
    yield


def create_app() -> FastAPI:
    """Build the FastAPI application.

    Returns:
        FastAPI: Application with middleware, error handlers and routers.
    """
    app = FastAPI(
        title="GitHub Notes Service",
        description="Notes linked to GitHub pull requests",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials="*" not in CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(router_health.router, tags=["health"])
    app.include_router(router_notes.router, tags=["notes"])
    app.include_router(router_profile.router, tags=["profile"])

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=PORT)
