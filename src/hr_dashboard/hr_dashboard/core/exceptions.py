class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the caller cannot be authenticated."""


class UnauthorizedError(AuthenticationError):
    """Raised when a bearer credential is missing or does not match."""


class ConfigurationError(DomainError):
    """Raised when required server configuration is absent."""


class MisconfiguredError(ConfigurationError):
    """Raised when the store's administrative credential is not configured."""


class StoreError(DomainError):
    """Base exception for record store failures."""


class StoreQueryError(StoreError):
    """Raised when a store query fails. Terminal for the calling operation."""


class RecordUpdateError(StoreError):
    """Raised when a single record update fails."""

    def __init__(self, record_id, detail: str):
        super().__init__(f"update of record {record_id} failed: {detail}")
        self.record_id = record_id
        self.detail = detail


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""
