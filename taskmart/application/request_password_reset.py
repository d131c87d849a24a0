import logging

import taskmart.domain.services as domain_services
from taskmart.domain.errors import InvalidInput
from taskmart.domain.ports.otp_delivery import OTPDeliveryPort
from taskmart.domain.ports.otp_store import OTPStorePort
from taskmart.domain.ports.unit_of_work import UnitOfWorkPort

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = (
    "If an account with this email exists, an OTP code has been sent."
)


async def request_password_reset(
    uow: UnitOfWorkPort,
    otp_store: OTPStorePort,
    delivery: OTPDeliveryPort,
    email: str | None,
) -> str:
    """
    Issue a reset code for `email` if an account exists and hand it to delivery.

    The returned acknowledgment is the same whether or not the account
    exists; callers must send it back unchanged.
    """
    if not email or not email.strip():
        raise InvalidInput("Email is required")

    normalized_email = domain_services.normalize_identity(email)
    if not domain_services.is_valid_email(normalized_email):
        raise InvalidInput("Invalid email format")

    async with uow as transaction:
        account = await transaction.accounts.find_by_email(normalized_email)

    if account is not None:
        code = await otp_store.issue(normalized_email)
        try:
            delivery.deliver(normalized_email, code, name=account.name)
        except Exception:  # noqa: BLE001
            logger.warning(
                "otp delivery could not be scheduled",
                extra={"email": normalized_email},
                exc_info=True,
            )
        logger.info("password reset code issued", extra={"email": normalized_email})
    else:
        logger.info("password reset requested for unknown email")

    return RESET_REQUESTED_MESSAGE
