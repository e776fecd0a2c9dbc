# /guidebot/utils/lifecycle.py

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from guidebot.utils.logging import setup_logging
from guidebot.services.db_service import db_service
from guidebot.services.cache_service import cache_service
from guidebot.services.string_service import string_service
from guidebot.services.media_service import media_service
from guidebot.config.settings import settings

# Startup: logging, indexes, string overrides and the media catalog.
# Shutdown: close the Redis and MongoDB clients.

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    setup_logging()

    logger.info(f"Guidebot starting up ({settings.environment})...")

    await db_service.create_indexes()
    await string_service.load_strings()
    await media_service.load_catalog()

    logger.info("Application startup complete. Ready to accept requests.")

    yield

    logger.info("Application shutting down...")

    await cache_service.close()
    if db_service.client:
        db_service.client.close()
