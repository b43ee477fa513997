import logging.config
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import AsyncEngine
from starlette.exceptions import HTTPException as StarletteHTTPException

from csv_importer.api import health
from csv_importer.api.responses import http_exception_handler, validation_exception_handler
from csv_importer.api.router import api_router
from csv_importer.config import Settings, get_settings
from csv_importer.database import create_db_and_tables, create_db_engine, create_session_factory
from csv_importer.logging_config import configure_logging
from csv_importer.middleware import RequestLoggingMiddleware

# All timestamps are produced and stored in UTC
os.environ["TZ"] = "UTC"
if hasattr(time, "tzset"):
    time.tzset()

# Configure logging
logging.config.dictConfig(configure_logging())
logger = logging.getLogger("csv_importer.main")


def create_app(settings: Optional[Settings] = None, engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Build the application around a database engine.

    Args:
        settings: Settings to use, defaults to the environment settings
        engine: Engine to use, defaults to one built from ``settings``

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    if engine is None:
        engine = create_db_engine(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.PROJECT_NAME}")
        # Fails startup when the database is unreachable
        await create_db_and_tables(engine)
        yield
        logger.info(f"Shutting down {settings.PROJECT_NAME}")
        await engine.dispose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_V1_STR}/openapi.json",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # Set up CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router, tags=["Health"])
    app.include_router(api_router, prefix=settings.API_V1_STR)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "csv_importer.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
