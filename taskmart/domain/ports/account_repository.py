from __future__ import annotations

from typing import Optional, Protocol

from taskmart.domain.entities import Account


class AccountRepositoryPort(Protocol):
    async def find_by_email(self, email: str) -> Optional[Account]:
        """
        Fetch the account for a normalized email.
        Read-only. Return None if not found.
        """

    async def set_password_hash(self, account_id: str, password_hash: str) -> None:
        """Replace the stored password hash of the account."""
