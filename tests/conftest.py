"""
Pytest fixtures for the Regal API tests.

Provides settings, an in-memory MongoDB (mongomock) behind the real document
store, the wired application container, a test client and two account holders.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient

from regal.core.app_factory import build_container, create_application
from regal.core.config import Settings
from regal.domain.models import IdentityContext

TEST_SECRET = "test-signing-secret"


@pytest.fixture
def settings(monkeypatch, tmp_path):
    monkeypatch.setenv("JWT_SECRET", TEST_SECRET)
    monkeypatch.setenv("STORAGE_DIR", str(tmp_path / "storage"))
    for key in ("SMTP_HOST", "SMTP_USERNAME", "SMTP_PASSWORD", "MONGO_URI", "MONGO_HOST"):
        monkeypatch.delenv(key, raising=False)
    return Settings()


@pytest.fixture
def database():
    return mongomock.MongoClient()["regal_test"]


@pytest.fixture
def container(settings, database):
    return build_container(settings, database)


@pytest.fixture
def client(container):
    return TestClient(create_application(container=container))


def _register(container, first_name, email):
    return container.account_service.register(
        first_name=first_name,
        last_name="Tester",
        email=email,
        password="s3cret-pass",
    )


def _headers(container, user):
    token = container.token_service.issue(user.id, user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def alice(container):
    return _register(container, "Alice", "alice@example.com")


@pytest.fixture
def bob(container):
    return _register(container, "Bob", "bob@example.com")


@pytest.fixture
def alice_headers(container, alice):
    return _headers(container, alice)


@pytest.fixture
def bob_headers(container, bob):
    return _headers(container, bob)


@pytest.fixture
def alice_identity(alice):
    return IdentityContext(subject_id=alice.id, subject_email=alice.email, token="unused")


@pytest.fixture
def bob_identity(bob):
    return IdentityContext(subject_id=bob.id, subject_email=bob.email, token="unused")


def product_payload(owner_id, company_id="company-1", name="Gold Ring", **overrides):
    payload = {
        "owner_id": owner_id,
        "company_id": company_id,
        "name": name,
        "producer": {"name": "Regal Works"},
        "price": 120.5,
        "profit_percent": 25,
        "manufacture_year": 2023,
        "production_year": 2024,
        "stock": 10,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def alice_product(container, alice_identity):
    return container.product_service.create(alice_identity, product_payload(alice_identity.owner_id))


@pytest.fixture
def alice_company(container, alice_identity):
    return container.company_service.create(
        alice_identity,
        {"name": "Alice Jewels", "commercial_name": "AJ", "phone": [{"label": "office", "value": "123"}]},
    )
