import logging
from contextlib import asynccontextmanager
from logging import INFO

from fastapi import FastAPI
from tortoise.contrib.fastapi import RegisterTortoise

from food_ordering.core.config import Settings

log = logging.getLogger(__name__)

# Set logging level for Tortoise ORM
logging.getLogger('tortoise').setLevel(INFO)

# Define all models modules for the ORM
MODELS_MODULES = [
    "food_ordering.models.user",
    "food_ordering.models.dish",
    "food_ordering.models.cart",
    "food_ordering.models.order",
]


def tortoise_config(settings: Settings) -> dict:
    return {
        "connections": {"default": settings.DATABASE_URL},
        "apps": {
            "models": {
                "models": MODELS_MODULES,
                "default_connection": "default",
            }
        },
    }


@asynccontextmanager
async def connect_db(app: FastAPI, settings: Settings):
    """
    Binds Tortoise ORM to the application for the lifetime of the lifespan,
    so request handlers share the connections opened at startup. Tables are
    generated when GENERATE_SCHEMAS is set; connections close on shutdown.
    """
    registration = RegisterTortoise(
        app,
        config=tortoise_config(settings),
        generate_schemas=settings.GENERATE_SCHEMAS,
        add_exception_handlers=False,
    )
    try:
        await registration.__aenter__()
    except Exception:
        log.exception("Could not connect to database.")
        # Re-raise to prevent the application from starting without a database
        raise
    log.info("Database connection established.")
    try:
        yield
    finally:
        await registration.__aexit__(None, None, None)
        log.info("Database connections closed.")
