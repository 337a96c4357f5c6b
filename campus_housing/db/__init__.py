"""Database engine, session factory and schema bootstrap."""

from campus_housing.db.init_db import drop_db, init_db, seed_demo_data
from campus_housing.db.session import build_engine, build_session_factory

__all__ = ["build_engine", "build_session_factory", "drop_db", "init_db", "seed_demo_data"]
