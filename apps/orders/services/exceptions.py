"""
Domain-specific exceptions for orders app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class OrdersServiceError(Exception):
    """Base exception for all orders service errors."""
    pass


class OrderValidationError(OrdersServiceError):
    """Raised when order input is invalid (missing description, bad dishes)."""
    pass


class EmptyOrderError(OrderValidationError):
    """Raised when an order has no lines to split."""
    pass


class InvalidFinalAmountError(OrderValidationError):
    """Raised when the payable amount is not within (0, total items price]."""
    pass


class OrderNotFoundError(OrdersServiceError):
    """Raised when an order does not exist."""
    pass


class OrderWeekNotFoundError(OrdersServiceError):
    """Raised when the week targeted by an order does not exist."""
    pass


class WeekFinalizedError(OrdersServiceError):
    """Raised when an order targets a week that is already finalized."""
    pass


class OrderMemberNotFoundError(OrdersServiceError):
    """Raised when a dish references members that do not exist."""
    pass
