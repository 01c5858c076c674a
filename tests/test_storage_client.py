import sqlite3
import threading
import time

import pytest
from sqlalchemy import text

from shared.core.config import Settings
from shared.core.database import StorageClient
from shared.core.exceptions import InfrastructureError


class FlakyConnect:
    """sqlite3 creator that fails the first `failures` calls."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise sqlite3.OperationalError("database is starting up")
        return sqlite3.connect(":memory:", check_same_thread=False)


class SlowConnect(FlakyConnect):

    def __call__(self):
        time.sleep(0.05)
        return super().__call__()


def _client(creator, sleeps, retries=5):
    return StorageClient(
        "sqlite://",
        connect_retries=retries,
        backoff=1.0,
        backoff_factor=1.5,
        max_backoff=2.0,
        engine_options={"creator": creator},
        sleep=sleeps.append,
    )


class TestInitialConnect:

    def test_retries_with_capped_backoff_then_connects(self):
        sleeps = []
        creator = FlakyConnect(failures=3)
        storage = _client(creator, sleeps)

        storage.connect()

        assert storage.is_connected
        assert sleeps == [1.0, 1.5, 2.0]
        storage.dispose()

    def test_gives_up_after_the_last_attempt(self):
        sleeps = []
        storage = _client(FlakyConnect(failures=100), sleeps, retries=3)

        with pytest.raises(InfrastructureError):
            storage.connect()

        assert not storage.is_connected
        assert sleeps == [1.0, 1.5]

    def test_connect_is_idempotent(self):
        sleeps = []
        creator = FlakyConnect(failures=0)
        storage = _client(creator, sleeps)

        engine = storage.connect()

        assert storage.connect() is engine
        assert sleeps == []
        storage.dispose()

    def test_parallel_first_requests_share_one_engine(self):
        sleeps = []
        creator = SlowConnect(failures=0)
        storage = _client(creator, sleeps)
        barrier = threading.Barrier(6)
        engines = []

        def first_request():
            barrier.wait()
            engines.append(storage.connect())

        threads = [threading.Thread(target=first_request) for _ in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(engines) == 6
        assert all(e is engines[0] for e in engines)
        assert creator.calls == 1
        storage.dispose()

    def test_after_failed_startup_each_connect_tries_once(self):
        sleeps = []
        creator = FlakyConnect(failures=100)
        storage = _client(creator, sleeps, retries=3)

        with pytest.raises(InfrastructureError):
            storage.connect()
        assert creator.calls == 3

        with pytest.raises(InfrastructureError):
            storage.connect()

        assert creator.calls == 4
        assert sleeps == [1.0, 1.5]

    def test_recovers_on_a_later_single_attempt(self):
        sleeps = []
        creator = FlakyConnect(failures=2)
        storage = _client(creator, sleeps, retries=2)

        with pytest.raises(InfrastructureError):
            storage.connect()

        storage.connect()

        assert storage.is_connected
        assert creator.calls == 3
        assert sleeps == [1.0]
        storage.dispose()


class TestSessions:

    def test_session_scope_rolls_back_on_error(self, storage):
        with storage.session_scope() as db:
            db.execute(text("CREATE TABLE scratch (id INTEGER)"))

        with pytest.raises(RuntimeError):
            with storage.session_scope() as db:
                db.execute(text("INSERT INTO scratch (id) VALUES (1)"))
                raise RuntimeError("abort")

        with storage.session_scope() as db:
            assert db.execute(text("SELECT COUNT(*) FROM scratch")).scalar() == 0

    def test_ping(self, storage):
        assert storage.ping() is True
        storage.dispose()
        assert storage.ping() is False


class TestFromSettings:

    def test_database_url_override(self):
        settings = Settings(DATABASE_URL="sqlite:///./local.db", DB_CONNECT_RETRIES=2)
        storage = StorageClient.from_settings(settings)
        assert storage.database_url == "sqlite:///./local.db"
        assert storage.connect_retries == 2

    def test_composed_postgres_url(self):
        settings = Settings(DATABASE_URL=None, DB_USER="wh", DB_PASS="secret", DB_HOST="db", DB_PORT="5433", DB_NAME="stock")
        assert settings.database_url == "postgresql+psycopg2://wh:secret@db:5433/stock"
