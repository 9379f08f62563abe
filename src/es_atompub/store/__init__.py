"""Store – feed store port and SQLAlchemy adapter."""
from es_atompub.store.gateway import FeedStoreGateway
from es_atompub.store.session import SqlAlchemySessionFactory
from es_atompub.store.sqlalchemy import SQLAlchemyFeedStore

__all__ = ["FeedStoreGateway", "SQLAlchemyFeedStore", "SqlAlchemySessionFactory"]
