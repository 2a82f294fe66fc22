class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    http_status = 400


class ConflictError(DomainError):
    """Raised on check-in while the user already has an open session."""

    http_status = 409


class InvalidStateError(DomainError):
    """Raised on check-out while the user has no open session."""

    http_status = 400
