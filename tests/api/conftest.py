import pytest
from fastapi.testclient import TestClient

from taskmart.infrastructure.otp.memory_store import InMemoryOTPStore
from taskmart.main import create_app
from taskmart.presentation.dependencies import (
    get_hash_password,
    get_otp_delivery,
    get_otp_store,
    get_uow,
)
from tests.fakes import FakeClock, FakeDelivery, FakeUoW


@pytest.fixture()
def app_and_deps():
    app = create_app()
    uow = FakeUoW()
    uow.accounts.add("user@example.com", name="Jeremy", account_id="u1")
    clock = FakeClock()
    store = InMemoryOTPStore(ttl_seconds=600, clock=clock)
    delivery = FakeDelivery()

    app.dependency_overrides[get_uow] = lambda: uow
    app.dependency_overrides[get_otp_store] = lambda: store
    app.dependency_overrides[get_otp_delivery] = lambda: delivery
    app.dependency_overrides[get_hash_password] = lambda: (lambda plain: "hashed-" + plain)

    try:
        yield app, {"uow": uow, "store": store, "delivery": delivery, "clock": clock}
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def deps(app_and_deps):
    _, deps = app_and_deps
    return deps


@pytest.fixture()
def client(app_and_deps):
    app, _ = app_and_deps
    return TestClient(app, raise_server_exceptions=False)


def request_code(client: TestClient, deps, email: str = "user@example.com") -> str:
    response = client.post("/v1/password/forgot", json={"email": email})
    assert response.status_code == 200, response.text
    return deps["delivery"].last_code
