"""Database configuration, session management and the counter transaction boundary."""

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from erp_counter.config import settings
from erp_counter.exceptions import CounterTransactionTimeoutError
from erp_counter.utils.logger import logger

# Path to alembic.ini relative to this file (erp_counter/database.py -> alembic.ini)
_ALEMBIC_INI = str(Path(__file__).parent.parent / "alembic.ini")


def create_counter_engine(
    database_url: str,
    lock_wait_ms: Optional[int] = None,
    echo: bool = False,
    **engine_kwargs,
) -> Engine:
    """
    Create an engine whose transactions are serializable.

    SQLite has no SERIALIZABLE level to ask for, so every transaction is
    opened with ``BEGIN IMMEDIATE``: writers queue on the database lock for
    at most ``lock_wait_ms`` before the driver reports it as locked. Other
    dialects get ``isolation_level="SERIALIZABLE"``.

    Args:
        database_url: SQLAlchemy database URL
        lock_wait_ms: Maximum time to wait for a lock (defaults to settings)
        echo: Echo SQL statements
        **engine_kwargs: Extra keyword arguments for ``create_engine``

    Returns:
        Configured engine
    """
    if lock_wait_ms is None:
        lock_wait_ms = settings.counter_lock_wait_ms

    if not database_url.startswith("sqlite"):
        engine_kwargs.setdefault("isolation_level", "SERIALIZABLE")
        engine_kwargs.setdefault("pool_pre_ping", True)
        return create_engine(database_url, echo=echo, **engine_kwargs)

    connect_args = dict(engine_kwargs.pop("connect_args", {}))
    connect_args.setdefault("timeout", lock_wait_ms / 1000)
    connect_args.setdefault("check_same_thread", False)
    engine = create_engine(
        database_url, echo=echo, connect_args=connect_args, **engine_kwargs
    )

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        # pysqlite would otherwise emit its own deferred BEGIN
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")

    return engine


# Create engine
engine = create_counter_engine(settings.database_url, echo=settings.debug)

# Create session factory
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)

# Create base class for models
Base = declarative_base()


def _apply_time_limits(session: Session, lock_wait_ms: int, timeout_ms: int) -> None:
    """Bound lock waits and statement time on servers that support it."""
    if session.get_bind().dialect.name == "postgresql":
        session.execute(text(f"SET LOCAL lock_timeout = {int(lock_wait_ms)}"))
        session.execute(text(f"SET LOCAL statement_timeout = {int(timeout_ms)}"))


@contextmanager
def counter_transaction(
    session_factory: Optional[Callable[[], Session]] = None,
    lock_wait_ms: Optional[int] = None,
    timeout_ms: Optional[int] = None,
) -> Iterator[Session]:
    """
    Run a block in one serializable transaction with a bounded duration.

    Commits when the block completes within ``timeout_ms``; otherwise rolls
    back and raises CounterTransactionTimeoutError. Any error raised inside
    the block rolls the transaction back and propagates unchanged. There is
    no retry here: a serialization conflict or lock timeout reaches the
    caller, which decides whether to try again.

    Args:
        session_factory: Session factory (defaults to SessionLocal)
        lock_wait_ms: Lock wait limit (defaults to settings)
        timeout_ms: Overall transaction limit (defaults to settings)

    Yields:
        Session bound to the open transaction
    """
    factory = session_factory or SessionLocal
    if lock_wait_ms is None:
        lock_wait_ms = settings.counter_lock_wait_ms
    if timeout_ms is None:
        timeout_ms = settings.counter_transaction_timeout_ms

    session = factory()
    started = time.monotonic()
    try:
        _apply_time_limits(session, lock_wait_ms, timeout_ms)
        yield session

        elapsed_ms = (time.monotonic() - started) * 1000
        if elapsed_ms > timeout_ms:
            raise CounterTransactionTimeoutError(elapsed_ms, timeout_ms)
        session.commit()
    except Exception as e:
        session.rollback()
        logger.warning(f"Counter transaction rolled back: {e}")
        raise
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None, seed: bool = True):
    """Initialize database using Alembic migrations, then seed if empty.

    - With alembic.ini: upgrade to head.
    - No alembic.ini (tests, installed package): fall back to create_all().
    """
    import erp_counter.models  # noqa: F401

    bind = bind or engine
    alembic_ini = Path(_ALEMBIC_INI)
    if alembic_ini.exists():
        try:
            from alembic.config import Config
            from alembic import command

            alembic_cfg = Config(str(alembic_ini))
            alembic_cfg.set_main_option("sqlalchemy.url", bind.url.render_as_string(hide_password=False))
            command.upgrade(alembic_cfg, "head")
            logger.info("Database migrations applied successfully")
        except Exception as e:
            logger.error(f"Error running database migrations: {e}")
            raise
    else:
        Base.metadata.create_all(bind=bind)
        logger.info("Database tables created with create_all (no alembic.ini found)")

    if seed:
        from erp_counter.seed import seed_if_empty

        seed_if_empty(bind)
