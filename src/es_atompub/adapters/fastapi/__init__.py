"""FastAPI adapter – routers, exception mapper, middleware and app factory."""
from es_atompub.adapters.fastapi.app import build_app, create_app
from es_atompub.adapters.fastapi.exception_mapper import FastAPIExceptionMapper
from es_atompub.adapters.fastapi.middleware import FastAPICorrelationIdMiddleware
from es_atompub.adapters.fastapi.routers import FastAPIFeedRouter, FastAPIHealthRouter

__all__ = [
    "FastAPICorrelationIdMiddleware",
    "FastAPIExceptionMapper",
    "FastAPIFeedRouter",
    "FastAPIHealthRouter",
    "build_app",
    "create_app",
]
