class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when no remote endpoint has been configured."""


class RemoteError(DomainError):
    """Raised when the spreadsheet backend cannot be reached or rejects a call."""


class CacheCorruptedError(DomainError):
    """Raised when the local data snapshot cannot be parsed."""
