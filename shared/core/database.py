import logging
import threading
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.core.exceptions import InfrastructureError

logger = logging.getLogger(__name__)

Base = declarative_base()


def _serialize_sqlite_writers(engine: Engine) -> None:
    """
    Open every SQLite transaction with BEGIN IMMEDIATE. pysqlite defers BEGIN
    until the first write, and two deferred transactions upgrading their read
    locks at the same time fail with "database is locked" instead of waiting.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin_immediate(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class StorageClient:
    """
    Owns the engine and session factory for one database.

    The first connect retries with exponential backoff (a cold database can
    take a few seconds to accept connections). After that the client fails
    fast: errors from sessions propagate to the caller untouched, and once
    the startup connect has failed each later connect makes a single attempt.
    """

    def __init__(
        self,
        database_url: str,
        connect_retries: int = 5,
        backoff: float = 1.0,
        backoff_factor: float = 1.5,
        max_backoff: float = 5.0,
        pool_size: int = 2,
        max_overflow: int = 2,
        pool_timeout: int = 30,
        pool_recycle: int = 300,
        engine_options: Optional[Dict[str, Any]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.database_url = database_url
        self.connect_retries = max(1, connect_retries)
        self.backoff = backoff
        self.backoff_factor = backoff_factor
        self.max_backoff = max_backoff
        self._sleep = sleep

        self.backend = make_url(database_url).get_backend_name()

        options: Dict[str, Any] = {"pool_pre_ping": True}
        if self.backend == "postgresql":
            # Guarded UPDATEs re-check their WHERE against the latest committed row
            options["isolation_level"] = "READ COMMITTED"
        if self.backend != "sqlite":
            options.update(
                pool_recycle=pool_recycle,
                pool_size=pool_size,          # max idle connections
                max_overflow=max_overflow,    # max temporary extra connections
                pool_timeout=pool_timeout,    # wait time before failing
            )
        options.update(engine_options or {})
        self._engine_options = options

        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._connect_lock = threading.Lock()
        self._connect_failed = False

    @classmethod
    def from_settings(cls, settings) -> "StorageClient":
        return cls(
            settings.database_url,
            connect_retries=settings.DB_CONNECT_RETRIES,
            backoff=settings.DB_CONNECT_BACKOFF,
            backoff_factor=settings.DB_CONNECT_BACKOFF_FACTOR,
            max_backoff=settings.DB_CONNECT_MAX_BACKOFF,
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
        )

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        return self.connect()

    def connect(self) -> Engine:
        if self._engine is not None:
            return self._engine

        with self._connect_lock:
            if self._engine is None:
                self._engine = self._open_engine()
        return self._engine

    def _open_engine(self) -> Engine:
        attempts = 1 if self._connect_failed else self.connect_retries
        engine = create_engine(self.database_url, **self._engine_options)
        if self.backend == "sqlite":
            _serialize_sqlite_writers(engine)
        delay = self.backoff
        last_error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            try:
                with engine.connect() as conn:
                    conn.execute(text("SELECT 1"))
                last_error = None
                break
            except SQLAlchemyError as e:
                last_error = e
                if attempt == attempts:
                    break
                logger.warning(
                    "Database connection attempt %s/%s failed, retrying in %.1fs: %s",
                    attempt, attempts, delay, e,
                )
                self._sleep(delay)
                delay = min(delay * self.backoff_factor, self.max_backoff)

        if last_error is not None:
            engine.dispose()
            self._connect_failed = True
            logger.error("Database connection failed after %s attempts", attempts)
            raise InfrastructureError("database unavailable") from last_error

        self._connect_failed = False
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
        logger.info("Database connection initialized (%s)", engine.dialect.name)
        return engine

    def session(self) -> Session:
        self.connect()
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        db = self.session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> bool:
        if self._engine is None:
            return False
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None


# Dependency


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage


def get_db(request: Request):
    db = get_storage(request).session()
    try:
        yield db
    finally:
        db.close()
