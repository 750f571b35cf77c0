import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, status

from food_ordering.api.v1.carts import router as carts_router
from food_ordering.api.v1.dishes import router as dishes_router
from food_ordering.api.v1.orders import router as orders_router
from food_ordering.api.v1.users import auth_router, router as users_router
from food_ordering.core.config import Settings
from food_ordering.core.db import connect_db
from food_ordering.core.exception_handlers import setup_exception_handlers
from food_ordering.core.identity import IdentityClient
from food_ordering.core.security import TokenVerifier

log = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handles startup and shutdown events."""
    settings: Settings = app.state.settings
    log.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}...")
    async with connect_db(app, settings):  # Connect to DB and generate schemas
        yield
    log.info(f"{settings.PROJECT_NAME} stopped.")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Builds the application. The settings object is created once here and
    everything that depends on it hangs off `app.state`.
    """
    settings = settings or Settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
        # Configure API documentation and paths
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_verifier = TokenVerifier.from_settings(settings)
    app.state.identity_client = IdentityClient(settings)

    # Include routers for modular API structure
    app.include_router(auth_router, prefix=API_PREFIX, tags=["Authentication"])
    app.include_router(users_router, prefix=API_PREFIX, tags=["Users"])
    app.include_router(dishes_router, prefix=API_PREFIX, tags=["Dishes"])
    app.include_router(carts_router, prefix=API_PREFIX, tags=["Cart"])
    app.include_router(orders_router, prefix=API_PREFIX, tags=["Orders"])

    setup_exception_handlers(app)

    @app.get("/health", status_code=status.HTTP_200_OK)
    async def health_check():
        """Simple health check endpoint."""
        return {"status": "ok", "app_name": settings.PROJECT_NAME}

    return app


app = create_app()
