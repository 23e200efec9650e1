import asyncio

import pytest
from fastapi.testclient import TestClient

from certledger.config import Settings
from certledger.db import Store
from certledger.ledger import CertificateLedger
from certledger.main import create_app
from certledger.registry import CustomerRegistry


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
def run_services(settings):
    """
    Run ``scenario(registry, ledger)`` against a fresh store in one event loop.
    """
    def run(scenario):
        async def main():
            store = Store(settings)
            await store.create_all()
            try:
                registry = CustomerRegistry(store)
                return await scenario(registry, CertificateLedger(store, registry))
            finally:
                await store.close()

        return asyncio.run(main())

    return run
