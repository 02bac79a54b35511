"""
Module: overtime_kernel.db.engine
Responsibility: SQLAlchemy engine initialization, session factory management,
    and transactional scope utilities.  This is the single point of database
    connection configuration for the engine.
Architecture position: Kernel > DB.  May import from db/base.py.  MUST NOT
    import from services/, stores/, domain/, or outer layers (except for
    create_tables which imports models).

Invariants enforced:
    - PostgreSQL is the deployment backend; SQLite (file or in-memory) is
      supported for tests and local tooling.  For SQLite the pysqlite
      transaction recipe is installed so SAVEPOINTs behave, and every
      transaction opens with BEGIN IMMEDIATE: SQLite has no row locks, so
      units of work take the database write lock up front and run one at
      a time.
    - Only in-memory SQLite shares a single connection (StaticPool); file
      databases get a connection per session.
    - Stores and services never commit; ``session_scope()`` owns
      commit-or-rollback for a unit of work.

Failure modes:
    - RuntimeError if get_engine/get_session called before
      init_engine_from_url().
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, make_url
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from overtime_kernel.logging_config import configure_logging, get_logger

logger = get_logger("db.engine")

# Module-level engine and session factory
_engine: Engine | None = None
_SessionFactory: sessionmaker[Session] | None = None


def _install_sqlite_transaction_recipe(engine: Engine) -> None:
    """Let SQLAlchemy, not pysqlite, emit BEGIN so SAVEPOINT works."""

    @event.listens_for(engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def init_engine_from_url(
    database_url: str,
    echo: bool = False,
    pool_size: int = 10,
    max_overflow: int = 5,
    pool_pre_ping: bool = True,
) -> Engine:
    """
    Initialize the SQLAlchemy engine from a database URL.

    Postconditions: Module-level _engine and _SessionFactory are initialized.
        All subsequent get_engine/get_session calls use this engine.

    Args:
        database_url: SQLAlchemy URL (postgresql://... or sqlite://...).
        echo: If True, log all SQL statements.
        pool_size: Number of connections to keep in the pool (server DBs).
        max_overflow: Max connections beyond pool_size (server DBs).
        pool_pre_ping: If True, test connections before use.

    Returns:
        SQLAlchemy Engine instance.
    """
    global _engine, _SessionFactory

    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database in (None, "", ":memory:"):
            _engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        else:
            _engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
            )
        _install_sqlite_transaction_recipe(_engine)
    else:
        _engine = create_engine(
            database_url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=pool_pre_ping,
        )

    _SessionFactory = sessionmaker(bind=_engine, expire_on_commit=False)

    configure_logging()
    logger.info(
        "engine_initialized",
        extra={
            "dialect": _engine.dialect.name,
            "echo": echo,
        },
    )

    return _engine


def get_engine() -> Engine:
    """
    Get the current engine instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _engine is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _engine


def get_session() -> Session:
    """
    Get a new session instance.

    Raises:
        RuntimeError: If engine has not been initialized.
    """
    if _SessionFactory is None:
        raise RuntimeError("Engine not initialized. Call init_engine_from_url() first.")
    return _SessionFactory()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Postconditions: On normal exit, session is committed and closed.
        On exception, session is rolled back and closed.  The exception
        is re-raised to the caller.

    Usage:
        with session_scope() as session:
            services = build_services(session, config)
            services.workflow.approve_claim(claim_id, approver_id, "ok")
    """
    session = get_session()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()


def create_tables() -> None:
    """
    Create all tables defined in the models.

    Preconditions: Engine must be initialized via init_engine_from_url().
    """
    from overtime_kernel.db.base import Base
    import overtime_kernel.models  # noqa: F401  registers every table

    Base.metadata.create_all(get_engine())


def reset_engine() -> None:
    """
    Reset the engine and session factory.

    Useful for test cleanup.
    """
    global _engine, _SessionFactory

    if _engine is not None:
        _engine.dispose()
        _engine = None

    _SessionFactory = None
