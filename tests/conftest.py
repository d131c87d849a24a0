import pytest

from taskmart.infrastructure.otp.memory_store import InMemoryOTPStore
from tests.fakes import FakeClock, FakeDelivery, FakeUoW


@pytest.fixture()
def uow():
    return FakeUoW()


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def otp_store(clock):
    return InMemoryOTPStore(ttl_seconds=600, clock=clock)


@pytest.fixture()
def delivery():
    return FakeDelivery()


@pytest.fixture()
def hash_password_stub():
    return lambda p: "hashed-" + p


@pytest.fixture()
def accept_any_password():
    return lambda p: []
