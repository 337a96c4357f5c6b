"""Database engine and session management."""
import logging
from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from campus_housing.config.settings import settings

logger = logging.getLogger(__name__)


def _configure_sqlite(engine: Engine) -> None:
    """
    Make every SQLite transaction take the database write lock up front.

    pysqlite defers BEGIN until the first write, which lets two readers
    both see a room with space before either writes. Issuing
    ``BEGIN IMMEDIATE`` serializes writers the way ``SELECT ... FOR UPDATE``
    does on PostgreSQL.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # Disable pysqlite's own transaction handling
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(
    database_url: Optional[str] = None,
    *,
    lock_timeout: Optional[float] = None,
    echo: Optional[bool] = None,
) -> Engine:
    """
    Create the database engine.

    Args:
        database_url: Connection URL, defaults to the configured database
        lock_timeout: Seconds a transaction may wait for a row lock
        echo: Log SQL statements, defaults to ``DB_ECHO``

    Returns:
        Configured SQLAlchemy engine
    """
    url = database_url or settings.get_database_url()
    timeout = settings.LOCK_TIMEOUT_SECONDS if lock_timeout is None else lock_timeout
    echo = settings.DB_ECHO if echo is None else echo

    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": timeout},
        )
        _configure_sqlite(engine)
    else:
        engine = create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_OVERFLOW,
            pool_recycle=3600,
            connect_args={"options": f"-c lock_timeout={int(timeout * 1000)}"},
        )

    logger.info(f"Created database engine: {engine.url.get_backend_name()}")
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    """
    Create the session factory bound to ``engine``.

    Objects stay readable after commit so services can build response
    schemas from them once the transaction has ended.
    """
    return sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
