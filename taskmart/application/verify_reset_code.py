import logging

import taskmart.domain.services as domain_services
from taskmart.domain.errors import InvalidInput, InvalidOrExpiredCode, InvalidOTPFormat
from taskmart.domain.ports.otp_store import OTPStorePort

logger = logging.getLogger(__name__)


def clean_reset_inputs(email: str | None, code: str | None) -> tuple[str, str]:
    """Presence and format checks shared by verify and reset. Returns (identity, CODE)."""
    if not email or not email.strip():
        raise InvalidInput("Email is required")
    if not code or not code.strip():
        raise InvalidInput("OTP code is required")

    normalized_code = code.strip().upper()
    if not domain_services.is_valid_otp_format(normalized_code):
        raise InvalidOTPFormat()

    return domain_services.normalize_identity(email), normalized_code


async def verify_reset_code(
    otp_store: OTPStorePort,
    email: str | None,
    code: str | None,
) -> int | None:
    """
    Mark the pending code for `email` as verified.

    Returns the seconds left before the code expires.
    """
    normalized_email, normalized_code = clean_reset_inputs(email, code)

    if not await otp_store.verify(normalized_email, normalized_code):
        logger.info("otp verification failed", extra={"email": normalized_email})
        raise InvalidOrExpiredCode()

    logger.info("otp verified", extra={"email": normalized_email})
    return await otp_store.remaining_seconds(normalized_email)
