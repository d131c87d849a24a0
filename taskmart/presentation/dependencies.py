from functools import partial
from typing import Callable

from fastapi import Request

from taskmart.domain.ports.otp_delivery import OTPDeliveryPort
from taskmart.domain.ports.otp_store import OTPStorePort
from taskmart.domain.ports.unit_of_work import UnitOfWorkPort
from taskmart.domain.services import password_violations
from taskmart.infrastructure.db.pool import get_pool
from taskmart.infrastructure.db.uow import PgUnitOfWork
from taskmart.infrastructure.security.password import hash_password
from taskmart.settings import get_settings


def get_uow() -> UnitOfWorkPort:
    return PgUnitOfWork(get_pool())


def get_otp_store(request: Request) -> OTPStorePort:
    # One store per process, built in taskmart.main.create_app()
    return request.app.state.otp_store


def get_otp_delivery(request: Request) -> OTPDeliveryPort:
    # This is set in taskmart.main lifespan()
    return request.app.state.otp_delivery


def get_hash_password() -> Callable[..., str]:
    return hash_password


def get_password_policy() -> Callable[[str], list[str]]:
    return partial(password_violations, min_length=get_settings().password_min_length)
