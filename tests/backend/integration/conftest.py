import importlib

import pytest

fastapi = pytest.importorskip("fastapi")
TestClient = pytest.importorskip("fastapi.testclient").TestClient


@pytest.fixture
def app_modules(monkeypatch, tmp_path):
    """
    Load the app with a JSON shard store rooted in a temp dir.
    Returns modules for monkeypatching in tests.
    """
    app_module = importlib.import_module("app.main")
    storage = importlib.import_module("app.infrastructure.storage.connection")
    shard_store = importlib.import_module("app.infrastructure.storage.shard_store")
    directory_service = importlib.import_module("app.application.directory_service")

    store = shard_store.JsonShardStore(tmp_path)
    monkeypatch.setattr(storage, "USERS_DATA_DIR", str(tmp_path))
    monkeypatch.setattr(storage, "store", store)

    return {
        "app": app_module.app,
        "storage": storage,
        "store": store,
        "service": directory_service,
        "data_dir": tmp_path,
    }


@pytest.fixture
def client(app_modules):
    return TestClient(app_modules["app"])


@pytest.fixture
def register_payload():
    return {
        "fullName": "Kunal Shah",
        "email": "kunal@example.com",
        "password": "s3cret",
        "confirmPassword": "s3cret",
        "role": "Homeowner",
        "phone": "555-0100",
    }
