from dataclasses import dataclass
from datetime import datetime


@dataclass
class Account:
    id: str | None = None
    email: str | None = None
    name: str | None = None

    def __post_init__(self):
        if self.email:
            self.email = self.email.strip().lower()
            if not self.email:
                raise ValueError("email cannot be empty")
        else:
            raise ValueError("email is required")


@dataclass
class OTPRecord:
    """
    A pending password-reset code for one identity.

    `verified` only ever goes from False to True; replacing or deleting
    the record is the only way back.

    `claimed` is held by the one reset currently using the code; a second
    reset cannot claim it until the first one releases it.
    """

    identity: str
    code: str
    expires_at: datetime
    verified: bool = False
    claimed: bool = False

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def mark_verified(self) -> None:
        self.verified = True

    def claim(self) -> bool:
        if not self.verified or self.claimed:
            return False
        self.claimed = True
        return True

    def release(self) -> None:
        self.claimed = False
