"""Shared fixtures: isolated configuration, a temp data directory and an API client."""
import pytest
from fastapi.testclient import TestClient

from jsonstash.settings import Settings
from api.main import create_app

AUTH = "test-secret"


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Keep a developer's config.yml, .env and PORT/AUTH_HEADER out of the tests."""
    monkeypatch.setenv("APP_CONFIG_FILE", str(tmp_path / "no-config.yml"))
    for var in ("PORT", "AUTH_HEADER"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def data_dir(tmp_path):
    return tmp_path / "data"


@pytest.fixture
def settings(data_dir):
    return Settings(
        data_dir=data_dir,
        auth_header={"value": AUTH},
        retention={"enabled": False},
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def state(app):
    return app.state.jsonstash


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers():
    return {"Authorization": AUTH}
