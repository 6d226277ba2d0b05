from __future__ import annotations


class AccountError(Exception):
    """Client-facing failure of an account operation.

    Carries the HTTP status and the message returned to the caller in the
    response envelope. Messages must never include internal detail.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(AccountError):
    """Malformed input: bad email, weak password, unknown role, bad upload."""


class NotFoundError(AccountError):
    pass


class ConflictError(AccountError):
    pass


class DuplicateEmailError(ConflictError):
    def __init__(self, message: str = "Email is already registered") -> None:
        super().__init__(message)


class DuplicateSupervisorError(ConflictError):
    def __init__(self, message: str = "A supervisor already exists for this company") -> None:
        super().__init__(message)


class AuthenticationError(AccountError):
    pass


class InfrastructureFault(Exception):
    """Server-side failure. Logged, never surfaced in detail to callers."""


class HashingError(InfrastructureFault):
    pass


class ConfigurationError(InfrastructureFault):
    pass


class StoreError(InfrastructureFault):
    pass
