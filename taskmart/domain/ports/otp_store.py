from typing import Protocol


class OTPStorePort(Protocol):
    """
    At most one pending code per identity. Identities are normalized by the
    store itself; absence and expiry are reported through return values.
    """

    async def issue(self, identity: str) -> str:
        """Create a fresh unverified code, replacing any previous one. Return the code."""

    async def verify(self, identity: str, code: str) -> bool:
        """True and mark verified if `code` matches (case-insensitive) and is not expired."""

    async def is_verified(self, identity: str) -> bool:
        """Verified flag of the live record, False if absent or expired."""

    async def claim(self, identity: str) -> bool:
        """
        Reserve a live, verified record for one reset. False if absent,
        expired, unverified or already claimed.
        """

    async def release(self, identity: str) -> None:
        """Drop the claim so the verified record can be used again. No error if absent."""

    async def remove(self, identity: str) -> None:
        """Delete any record for the identity. No error if absent."""

    async def remaining_seconds(self, identity: str) -> int | None:
        """Seconds left before expiry, rounded up. None if absent or expired."""
