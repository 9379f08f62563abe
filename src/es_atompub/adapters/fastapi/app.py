"""FastAPI adapter – application factory and production wiring."""
from __future__ import annotations

import contextlib
from typing import Any, AsyncIterator

from fastapi import FastAPI

from es_atompub import __version__
from es_atompub.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from es_atompub.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from es_atompub.adapters.fastapi.routers import FastAPIFeedRouter, FastAPIHealthRouter
from es_atompub.application import FeedResourceHandlers
from es_atompub.config import AtomPubSettings
from es_atompub.config.atompub import INSECURE_CONFIG_BANNER
from es_atompub.feed import FeedAssembler
from es_atompub.observability.health import HealthRegistry, KeyServiceHealthCheck, StoreHealthCheck
from es_atompub.observability.logging import get_logger
from es_atompub.security.encryption import AioBotoKmsClient, EnvelopeCipher
from es_atompub.store import SQLAlchemyFeedStore, SqlAlchemySessionFactory

logger = get_logger(__name__)


def create_app(
    handlers: FeedResourceHandlers,
    health_registry: HealthRegistry | None = None,
    lifespan: Any = None,
) -> FastAPI:
    """Assemble the HTTP surface around already-constructed collaborators."""
    app = FastAPI(title="es-atompub", version=__version__, lifespan=lifespan)
    app.add_middleware(FastAPICorrelationIdMiddleware)
    FastAPIExceptionMapper().register(app)
    app.include_router(FastAPIFeedRouter(handlers))
    app.include_router(FastAPIHealthRouter(health_registry or HealthRegistry()))
    return app


def build_app(settings: AtomPubSettings) -> FastAPI:
    """Wire the SQLAlchemy store, the KMS client and the cipher from *settings*.

    The KMS client is opened (and a data key generated once) during startup,
    so a bad key alias stops the process before it serves anything.
    """
    sessions = SqlAlchemySessionFactory(settings.database_url, pool_size=100)
    store = SQLAlchemyFeedStore(sessions)

    kms: AioBotoKmsClient | None = None
    if settings.encryption_enabled:
        kms = AioBotoKmsClient()
    else:
        logger.warning("KEY_ALIAS not set - responses will not be encrypted")
        logger.warning(INSECURE_CONFIG_BANNER)
    cipher = EnvelopeCipher(kms, settings.key_alias)

    registry = HealthRegistry()
    registry.register(StoreHealthCheck(store))
    registry.register(KeyServiceHealthCheck(cipher))

    handlers = FeedResourceHandlers(store, cipher, FeedAssembler(settings.linkhost, settings.link_proto))

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:  # noqa: ARG001
        try:
            if kms is not None:
                await kms.open()
                logger.info("key alias specified", key_alias=cipher.key_alias)
                await cipher.check_health()
            yield
        finally:
            if kms is not None:
                await kms.close()
            await sessions.dispose()

    return create_app(handlers, registry, lifespan=lifespan)


__all__ = ["build_app", "create_app"]
