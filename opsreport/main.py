from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from opsreport.api.v1.router import api_router
from opsreport.core.config import settings
from opsreport.core.logging import setup_logging
from opsreport.core.middleware import CorrelationIdMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    structlog.get_logger().info("app.startup", app_name=settings.APP_NAME, environment=settings.APP_ENV)
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS headers are set by the report route itself, including on its
    # OPTIONS preflight and on error responses.
    application.add_middleware(CorrelationIdMiddleware)

    application.include_router(api_router)

    return application


app = create_app()
