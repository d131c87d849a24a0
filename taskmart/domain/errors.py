class DomainError(Exception):
    """Base class for all domain-level errors."""

    default_message = "domain error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(DomainError):
    """A required field is missing, blank or malformed."""

    default_message = "invalid input"


class InvalidOTPFormat(InvalidInput):
    """The submitted code is not 5 characters of [0-9A-Z]."""

    default_message = "Invalid OTP format. OTP must be 5 alphanumeric characters."


class InvalidOrExpiredCode(DomainError):
    """No pending code, expired code or wrong code. Deliberately not told apart."""

    default_message = "Invalid or expired OTP code"


class PasswordMismatch(DomainError):
    default_message = "Passwords do not match"


class WeakPassword(DomainError):
    """The new password breaks one or more strength rules."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = list(violations)
        super().__init__(", ".join(self.violations))


class AccountNotFound(DomainError):
    """No account matches the lookup criteria (e.g., email)."""

    default_message = "User not found"
