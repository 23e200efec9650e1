import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from certledger.config import Settings
from certledger.main import create_app
from certledger.registry import CustomerRegistry

ANN = {"name": "Ann", "email": "ann@x.com"}
CERT = {"email": "ann@x.com", "key": "k", "body": "b"}


async def _broken(self, *args, **kwargs):
    raise OperationalError("SELECT 1", {}, Exception("database is gone"))


@pytest.fixture
def cert_id(client):
    client.post("/customer", json=ANN)
    return client.post("/certificate", json=CERT).json()["id"]


def test_create_customer_store_error(client, monkeypatch):
    monkeypatch.setattr(AsyncSession, "commit", _broken)
    r = client.post("/customer", json=ANN)
    assert r.status_code == 500
    assert r.json()["detail"] == "Error inserting customer into database."


def test_create_customer_lost_race(client, monkeypatch):
    assert client.post("/customer", json=ANN).status_code == 201

    async def never_exists(self, email):
        return False

    # the count check passes, the unique index still refuses the second row
    monkeypatch.setattr(CustomerRegistry, "exists", never_exists)
    r = client.post("/customer", json={"name": "Ann two", "email": "ann@x.com"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Customer with email exists."

    monkeypatch.undo()
    assert client.get("/customer/ann@x.com").json()["name"] == "Ann"


def test_create_certificate_store_error(client, monkeypatch):
    client.post("/customer", json=ANN)
    monkeypatch.setattr(AsyncSession, "commit", _broken)
    r = client.post("/certificate", json=CERT)
    assert r.status_code == 500
    assert r.json()["detail"] == "Error inserting certificate into database."


def test_list_certificates_store_error(client, monkeypatch):
    client.post("/customer", json=ANN)
    monkeypatch.setattr(AsyncSession, "scalars", _broken)
    r = client.get("/certificate/ann@x.com")
    assert r.status_code == 500
    assert r.json()["detail"] == "Error looking up customer certificates."


def test_update_store_error_is_404(client, cert_id, monkeypatch):
    monkeypatch.setattr(AsyncSession, "execute", _broken)
    r = client.put(f"/certificate/{cert_id}", json={"active": True})
    assert r.status_code == 404
    assert r.json()["detail"] == "Error updating certificate."


@pytest.mark.parametrize("value", ["yes", "on", "true", 1, 0, None])
def test_update_requires_json_boolean(client, cert_id, value):
    r = client.put(f"/certificate/{cert_id}", json={"active": value})
    assert r.status_code == 422
    assert client.get("/certificate/ann@x.com").json()[0]["active"] is False


def test_create_certificate_private_key_name_rejected(client):
    client.post("/customer", json=ANN)
    r = client.post("/certificate", json={"email": "ann@x.com", "private_key": "k", "body": "b"})
    assert r.status_code == 422
    assert client.get("/certificate/ann@x.com").json() == []


def test_shutdown_without_startup_store(tmp_path):
    app = create_app(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}"))
    with TestClient(app) as c:
        c.portal.call(app.state.store.close)
        del app.state.store
    # leaving the client ran shutdown without a store
