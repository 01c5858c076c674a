import pytest
from fastapi.testclient import TestClient

from shared.core.config import Settings
from warehouse_service.app.main import create_app
from tests.factories import build_storage


@pytest.fixture()
def storage():
    storage = build_storage()
    yield storage
    storage.dispose()


@pytest.fixture()
def app(storage):
    return create_app(Settings(DATABASE_URL="sqlite://"), storage=storage)


@pytest.fixture()
def client(app):
    return TestClient(app)
