"""Application error taxonomy.

Every error carries a machine-readable ``code`` and a human-readable
``message``. The HTTP layer maps each family to a status code in
``app.main``; services never build HTTP responses themselves.
"""


class AppError(Exception):
    """Base class for all application errors."""

    code = "app_error"

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> dict:
        return {"detail": self.message, "code": self.code}


class ValidationError(AppError):
    """Bad input or a request that can never succeed as sent."""

    code = "validation_error"


class SubdomainBlockedError(ValidationError):
    code = "subdomain_blocked"


class QuotaExceededError(ValidationError):
    code = "quota_exceeded"


class DuplicateSubdomainError(ValidationError):
    code = "duplicate_subdomain"


class InvalidStateError(ValidationError):
    """Operation not allowed for the record's current status."""

    code = "invalid_state"


class ResourceInUseError(ValidationError):
    """Entity still referenced by other rows."""

    code = "has_references"


class UnsupportedProviderError(ValidationError):
    code = "unsupported_provider"


class NotFoundError(AppError):
    code = "not_found"


class CredentialError(AppError):
    """Credentials cannot be decrypted, are incomplete, or were rejected."""

    code = "credential_error"


class ProviderError(AppError):
    """A DNS provider call failed."""

    code = "provider_error"

    def __init__(self, reason: str, code: str = None):
        super().__init__(f"provider operation failed: {reason}", code)
        self.reason = reason


class ProviderTimeoutError(ProviderError):
    code = "provider_timeout"


class AuthError(AppError):
    """Authentication or registration refused."""

    code = "auth_error"

    def __init__(self, message: str, code: str = None, status_code: int = 401):
        super().__init__(message, code)
        self.status_code = status_code
