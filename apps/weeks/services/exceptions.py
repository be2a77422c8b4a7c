"""
Domain-specific exceptions for weeks app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class WeeksServiceError(Exception):
    """Base exception for all weeks service errors."""
    pass


class WeekValidationError(WeeksServiceError):
    """Raised when week input is invalid."""
    pass


class InvalidWeekStartError(WeekValidationError):
    """Raised when a week does not start on a Monday."""

    def __init__(self, message, weekday_name=''):
        super().__init__(message)
        self.weekday_name = weekday_name


class WeekOverlapError(WeeksServiceError):
    """Raised when a new week overlaps an existing one."""

    def __init__(self, message, existing=None):
        super().__init__(message)
        self.existing = existing


class WeekNotFoundError(WeeksServiceError):
    """Raised when a week does not exist."""
    pass


class WeekHasOrdersError(WeeksServiceError):
    """Raised when deleting a week that still owns orders."""

    def __init__(self, message, order_count=0):
        super().__init__(message)
        self.order_count = order_count
