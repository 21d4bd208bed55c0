# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str,*, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class InvalidRangeError(ValidationError):
    """Raised when a date range has its start after its end."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., duplicate assignments)."""


class ConcurrencyError(DomainError):
    """Raised when optimistic locking detects a stale update."""


class OverlappingGroupError(BusinessRuleError):
    """Raised when a new group would overlap an existing one of the same assignment."""
    def __init__(self, message: str, *, existing_group_id: int):
        super().__init__(message, code="GROUP_OVERLAP")
        self.existing_group_id = existing_group_id
