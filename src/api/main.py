"""FastAPI application with lifespan management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from src.adapters.firestore_client import FirestoreClient
from src.adapters.subscription_client import SubscriptionClient
from src.api.admin_config import router as admin_config_router
from src.api.config import router as config_router
from src.config.logging import configure_logging, get_logger
from src.config.settings import Settings


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Initializes resources on startup and cleans up on shutdown.
    The admin config itself is never cached here; every request reads it fresh.
    """
    # Startup
    settings = Settings()  # type: ignore[call-arg]
    configure_logging(json_logs=settings.LOG_JSON)
    logger = get_logger()

    logger.info(
        "Starting application",
        project_id=settings.GCP_PROJECT_ID,
        is_local=settings.is_local,
        owner=settings.USERNAME,
    )

    app.state.settings = settings
    app.state.firestore = FirestoreClient(project_id=settings.GCP_PROJECT_ID)
    app.state.subscription_client = SubscriptionClient(
        timeout_seconds=settings.SUBSCRIPTION_TIMEOUT_SECONDS
    )

    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Application shutting down")


app = FastAPI(
    title="aithyTV Config Hub",
    description="비디오 소스 구독/관리 설정 서버",
    version="0.1.0",
    lifespan=lifespan,
)

# Register routers
app.include_router(config_router)
app.include_router(admin_config_router)


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Health status.
    """
    return {"status": "healthy"}
