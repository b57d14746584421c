"""Database package — async SQLAlchemy engine builder, session factory, Base."""
from radio_api.db.base import Base, build_engine, build_session_factory

__all__ = ["Base", "build_engine", "build_session_factory"]
