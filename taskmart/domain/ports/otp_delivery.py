from __future__ import annotations

from typing import Protocol


class OTPDeliveryPort(Protocol):
    def deliver(self, identity: str, code: str, *, name: str | None = None) -> None:
        """
        Hand a freshly issued code to the out-of-band channel.
        Must return without waiting for the send and must never raise.
        """
