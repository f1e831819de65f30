import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.api.v1 import submit_mail
from app.core.config import settings
from app.core.email import MailRelay
from app.core.errors import register_exception_handlers
from app.core.logging import setup_logging
from app.core.middleware import RequestIdMiddleware

# Setup logging
logger = setup_logging()


tags_metadata = [
    {
        "name": "forms",
        "description": "**Website forms** - Contact, support and quote requests relayed by email to the CADUAE inbox.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # The relay is process-wide, read-only configuration for every request.
    app.state.mail_relay = MailRelay.from_settings(settings)
    logger.info(f"Starting {settings.PROJECT_NAME} v{settings.VERSION}")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(
        f"Mail relay: {settings.SMTP_HOST}:{settings.SMTP_PORT} ssl={settings.SMTP_USE_SSL}"
    )
    if not settings.SMTP_PASSWORD.get_secret_value():
        logger.warning("SMTP_PASSWORD is not set; relay authentication will fail")

    yield

    # Shutdown
    del app.state.mail_relay
    logger.info("Shutting down...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
## CADUAE Mail Relay

Receives the website's contact, support and quote forms and forwards each
submission by email.
    """,
    openapi_tags=tags_metadata,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
)

# Request ID Tracing
app.add_middleware(RequestIdMiddleware)

# Register global exception handlers
register_exception_handlers(app)

# Website forms (public)
app.include_router(submit_mail.router, prefix=settings.API_PREFIX, tags=["forms"])


@app.get(
    "/health",
    summary="Health check",
    description="Returns service health metadata for monitoring and uptime checks.",
)
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }
