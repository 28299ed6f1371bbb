import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app


def build_settings(tmp_path, **overrides) -> Settings:
    values = {"database_url": f"sqlite+aiosqlite:///{tmp_path/'test.db'}", "log_level": "WARNING"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def app(tmp_path):
    return create_app(build_settings(tmp_path))


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def customer_payload(**overrides):
    payload = {
        "first_name": "Maria",
        "last_name": "Silva",
        "email": "maria.silva@mail.com",
        "phone": "+55 (11) 98765-4321",
    }
    payload.update(overrides)
    return payload


def location_payload(customer_id, **overrides):
    payload = {
        "address": "742 Evergreen Terrace",
        "city": "Springfield",
        "state": "Oregon",
        "zip": "97403",
        "customer_id": customer_id,
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_customer(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        overrides.setdefault("email", f"customer{counter['n']}@mail.com")
        response = client.post("/api/customers", json=customer_payload(**overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _make


@pytest.fixture()
def make_location(client):
    def _make(customer_id, **overrides):
        response = client.post("/api/locations", json=location_payload(customer_id, **overrides))
        assert response.status_code == 201, response.text
        return response.json()

    return _make
