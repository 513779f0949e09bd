"""
Fixtures de pruebas: cada test recibe una aplicación nueva sobre una base
SQLite en memoria, inicializada con /init-db (tablas, vista y datos).
"""
import pytest
from fastapi.testclient import TestClient

from app.config.database import Base
from app.config.settings import Settings
from app.main import create_app
from tests.helpers import API


def make_settings(**overrides) -> Settings:
    values = {
        "database_url": "sqlite://",
        "log_level": "WARNING",
        "stock_decrement_mode": "application",
        "stock_floor_policy": "allow",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def make_client():
    """Construye clientes con settings a medida; los cierra al final"""
    clients = []

    def _make(seed: bool = True, **overrides) -> TestClient:
        app = create_app(make_settings(**overrides))
        client = TestClient(app)
        client.__enter__()
        clients.append(client)

        if seed:
            response = client.post(f"{API}/init-db")
            assert response.status_code == 200, response.text
        else:
            Base.metadata.create_all(bind=app.state.database.engine)
        return client

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def empty_client(make_client):
    """Tablas creadas, sin datos iniciales"""
    return make_client(seed=False)
