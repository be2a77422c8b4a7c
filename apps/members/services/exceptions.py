"""
Domain-specific exceptions for members app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class MembersServiceError(Exception):
    """Base exception for all members service errors."""
    pass


class MemberValidationError(MembersServiceError):
    """Raised when member input is missing or blank."""
    pass


class MemberNotFoundError(MembersServiceError):
    """Raised when a member does not exist."""
    pass


class DuplicateMemberError(MembersServiceError):
    """Raised when a member name is already taken (case-insensitive)."""

    def __init__(self, message, names=()):
        super().__init__(message)
        self.names = list(names)


class MemberHasChargesError(MembersServiceError):
    """Raised when deleting a member who still owns order lines."""

    def __init__(self, message, item_count=0):
        super().__init__(message)
        self.item_count = item_count
