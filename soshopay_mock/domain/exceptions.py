"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    error = "Error"


class ValidationError(DomainException):
    """Required input is missing or malformed"""

    error = "Validation Error"


class NotFoundError(DomainException):
    """Lookup key has no matching record"""

    error = "Not Found"


class UnauthorizedError(DomainException):
    """Credential mismatch or rejected token"""

    error = "Unauthorized"
