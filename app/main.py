import logging
from contextlib import asynccontextmanager
from urllib.parse import urlparse

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.api.exception_handlers import UnhandledErrorMiddleware, register_exception_handlers
from app.api.routers import health
from app.core.config import Settings, settings
from app.core.security import SecurityHeadersMiddleware
from app.db.base import dispose_engine

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    dispose_engine()


def cors_origins(config: Settings) -> list[str]:
    """Only the FRONTEND_URL origin when set, any origin otherwise."""
    if not config.frontend_url:
        return ["*"]
    parsed = urlparse(config.frontend_url)
    return [f"{parsed.scheme}://{parsed.netloc}"]


def create_app(config: Settings = settings) -> FastAPI:
    app = FastAPI(title="Kitchen4u API", lifespan=lifespan)

    # Middleware added later wraps the earlier ones.
    app.add_middleware(UnhandledErrorMiddleware)

    origins = cors_origins(config)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS origins: %s", origins)

    app.add_middleware(SecurityHeadersMiddleware)

    register_exception_handlers(app)
    app.include_router(health.router)

    # API route groups (users, products, orders, wallet, subscriptions) are not
    # implemented yet; mount them under /api when they exist.
    return app


app = create_app()
