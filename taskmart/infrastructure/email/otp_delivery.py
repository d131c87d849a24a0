from __future__ import annotations

import asyncio
import logging
import math

from taskmart.domain.ports.email_port import EmailPort
from taskmart.domain.ports.otp_delivery import OTPDeliveryPort

logger = logging.getLogger(__name__)


_TEXT_TEMPLATE = """\
Password Reset

Hi {name},

We received a request to reset your password for your {app_name} account.

Use the following OTP code to verify your identity and reset your password:

    {code}

Important:
- This OTP code will expire in {ttl_minutes} minutes
- Do not share this code with anyone
- If you didn't request this, please ignore this email

If you have any concerns, please contact our support team at {support_email}.

Best regards,
The {app_name} Team
"""


def render_reset_email(
    *,
    code: str,
    name: str | None,
    ttl_seconds: int,
    app_name: str,
    support_email: str,
) -> tuple[str, str]:
    """Return (subject, body) of the password-reset email."""
    subject = f"{app_name} password reset code"
    body = _TEXT_TEMPLATE.format(
        name=name or "there",
        app_name=app_name,
        code=code,
        ttl_minutes=math.ceil(ttl_seconds / 60),
        support_email=support_email,
    )
    return subject, body


class EmailOTPDelivery(OTPDeliveryPort):
    """
    Sends reset codes by email in background tasks.

    `deliver` must be called from a running event loop. Send failures are
    logged and dropped; the issued code stays valid either way.
    """

    def __init__(
        self,
        email: EmailPort,
        *,
        ttl_seconds: int,
        app_name: str = "TaskMart",
        support_email: str = "support@taskmart.com",
    ) -> None:
        self._email = email
        self._ttl_seconds = ttl_seconds
        self._app_name = app_name
        self._support_email = support_email
        self._pending: set[asyncio.Task] = set()

    def deliver(self, identity: str, code: str, *, name: str | None = None) -> None:
        task = asyncio.get_running_loop().create_task(
            self._send(identity, code, name)
        )
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _send(self, identity: str, code: str, name: str | None) -> None:
        subject, body = render_reset_email(
            code=code,
            name=name,
            ttl_seconds=self._ttl_seconds,
            app_name=self._app_name,
            support_email=self._support_email,
        )
        try:
            await self._email.send(
                to=identity,
                subject=subject,
                body=body,
                idempotency_key=f"password-reset:{identity}:{code}",
            )
        except Exception:  # noqa: BLE001
            logger.warning("otp delivery failed", extra={"to": identity}, exc_info=True)
            return
        logger.info("otp delivered", extra={"to": identity})

    async def drain(self) -> None:
        """Wait for every send started so far."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
