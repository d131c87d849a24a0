import logging
from typing import Callable

from taskmart.application.verify_reset_code import clean_reset_inputs
from taskmart.domain.errors import (
    AccountNotFound,
    InvalidInput,
    InvalidOrExpiredCode,
    PasswordMismatch,
    WeakPassword,
)
from taskmart.domain.ports.otp_store import OTPStorePort
from taskmart.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)


async def reset_password(
    uow: UnitOfWorkPort,
    otp_store: OTPStorePort,
    email: str | None,
    code: str | None,
    new_password: str | None,
    confirm_password: str | None,
    hash_password: Callable[..., str],
    password_policy: Callable[[str], list[str]],
) -> None:
    # presence of all four fields comes before any format check
    if not email or not email.strip():
        raise InvalidInput("Email is required")
    if not code or not code.strip():
        raise InvalidInput("OTP code is required")
    if not new_password:
        raise InvalidInput("New password is required")
    if not confirm_password:
        raise InvalidInput("Confirm password is required")

    normalized_email, normalized_code = clean_reset_inputs(email, code)

    # clients may skip the verify step and come straight here with the code
    if not await otp_store.is_verified(normalized_email):
        if not await otp_store.verify(normalized_email, normalized_code):
            raise InvalidOrExpiredCode(
                "Invalid or expired OTP code. Please request a new OTP."
            )

    if new_password != confirm_password:
        raise PasswordMismatch()

    violations = password_policy(new_password)
    if violations:
        raise WeakPassword(violations)

    hashed_password = hash_password(new_password)

    # only one reset at a time may spend the verified code
    if not await otp_store.claim(normalized_email):
        raise InvalidOrExpiredCode(
            "Invalid or expired OTP code. Please request a new OTP."
        )

    try:
        async with uow as transaction:
            account = await transaction.accounts.find_by_email(normalized_email)
            if account is None:
                raise AccountNotFound()
            await transaction.accounts.set_password_hash(account.id, hashed_password)
            await transaction.commit()
    except BaseException:
        await otp_store.release(normalized_email)
        raise

    await otp_store.remove(normalized_email)
    logger.info("password reset completed", extra={"account_id": account.id})
