import asyncio
import logging
import sys

import uvicorn

from wordrace.core.config import settings
from wordrace.core.logging import setup_logging
from wordrace.db.session import create_engine, init_db

setup_logging("DEBUG")
logger = logging.getLogger(__name__)


def start_dev_server() -> None:
    logger.info("Starting development server with reload")
    uvicorn.run("wordrace.main:app", host="0.0.0.0", port=8000, reload=True)


def start_prod_server() -> None:
    logger.info("Starting production server")
    uvicorn.run("wordrace.main:app", host="0.0.0.0", port=8000)


async def _create_tables(database_url: str) -> None:
    engine = create_engine(database_url)
    try:
        await init_db(engine)
    finally:
        await engine.dispose()


def initialize_db() -> None:
    if not settings.DATABASE_URL:
        logger.error("DATABASE_URL is not set")
        sys.exit(1)

    logger.info("Initializing database")
    asyncio.run(_create_tables(settings.DATABASE_URL))
    logger.info("Database initialization completed")


def run_coverage() -> None:
    from pytest import main as pytest_main

    logger.info("Running test coverage")
    sys.exit(
        pytest_main(["--cov=wordrace", "--cov-report=term-missing", "--no-cov-on-fail"]),
    )
