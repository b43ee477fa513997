#!/usr/bin/env python3
"""
Create the events and todo_events tables.

Uses the DB_* environment settings and the SQLAlchemy models, so it creates
the same schema the API creates on startup. Useful for preparing a database
before the first deploy.
"""
import asyncio
import logging

from sqlalchemy import inspect

from csv_importer.config import get_settings
from csv_importer.database import create_db_and_tables, create_db_engine

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all tables and log the ones present afterwards."""
    settings = get_settings()
    engine = create_db_engine(settings)
    logger.info(f"Creating tables on {settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}")

    try:
        await create_db_and_tables(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        logger.info(f"Tables in database: {tables}")
    except Exception as e:
        logger.error(f"Error creating tables: {str(e)}")
        raise
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(create_tables())
