from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from taskmart.domain.ports.otp_store import OTPStorePort
from taskmart.infrastructure.db.pool import close_pool, get_pool
from taskmart.infrastructure.email.http_smtp_adapter import HttpSmtpEmailAdapter
from taskmart.infrastructure.email.otp_delivery import EmailOTPDelivery
from taskmart.infrastructure.otp.memory_store import InMemoryOTPStore
from taskmart.infrastructure.redis_cache.otp_store import RedisOTPStore
from taskmart.infrastructure.redis_cache.pool import close_redis, get_redis
from taskmart.logging import setup_logging
from taskmart.presentation.api import api
from taskmart.presentation.errors import register_exception_handlers
from taskmart.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_otp_store(settings: Settings) -> OTPStorePort:
    if settings.otp_backend == "redis":
        return RedisOTPStore(get_redis(), ttl_seconds=settings.otp_ttl_seconds)
    return InMemoryOTPStore(ttl_seconds=settings.otp_ttl_seconds)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings

    # startup
    pool = get_pool()
    if getattr(pool, "closed", True):
        await pool.open()

    email_adapter = HttpSmtpEmailAdapter(
        base_url=settings.smtp_base_url,
        sender=settings.support_email,
    )
    delivery = EmailOTPDelivery(
        email_adapter,
        ttl_seconds=settings.otp_ttl_seconds,
        app_name=settings.app_name,
        support_email=settings.support_email,
    )
    app.state.otp_delivery = delivery  # expose to dependencies
    logger.info("startup complete", extra={"otp_backend": settings.otp_backend})

    try:
        yield
    finally:
        # shutdown: let in-flight reset emails go out before closing the client
        await delivery.drain()
        await email_adapter.aclose()
        if settings.otp_backend == "redis":
            await close_redis()
        await close_pool()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    app = FastAPI(title="TaskMart Password Reset API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.otp_store = build_otp_store(settings)
    register_exception_handlers(app)
    app.include_router(api)
    return app


app = create_app()
