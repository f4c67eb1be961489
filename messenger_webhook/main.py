"""FastAPI application initialization."""

from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from sentry_sdk.integrations.fastapi import FastApiIntegration

from messenger_webhook.api import health, webhook
from messenger_webhook.config import get_settings
from messenger_webhook.constants import DEFAULT_HOST, SERVICE_NAME, SERVICE_VERSION
from messenger_webhook.logging_config import setup_logfire
from messenger_webhook.middleware.correlation_id import CorrelationIDMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    settings = get_settings()

    # Initialize Logfire for observability
    setup_logfire(app, settings)

    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            # Event payloads carry user IDs and message text
            send_default_pii=False,
            environment=settings.env,
            integrations=[FastApiIntegration()],
        )

    logfire.info(
        "Application startup complete",
        environment=settings.env,
        sentry_enabled=bool(settings.sentry_dsn),
    )

    yield

    logfire.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Receives and authenticates Facebook Messenger page webhooks",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

# Correlation ID middleware (must be first for request tracing)
app.add_middleware(CorrelationIDMiddleware)

# Register routers
app.include_router(health.router, tags=["health"])
app.include_router(webhook.router, prefix="/webhook", tags=["webhook"])


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "messenger_webhook.main:app",
        host=DEFAULT_HOST,
        port=settings.port,
        reload=settings.env == "local",
    )
