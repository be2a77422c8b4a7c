"""
Domain-specific exceptions for payments app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PaymentsServiceError(Exception):
    """Base exception for all payments service errors."""
    pass


class GatewayConfigurationError(PaymentsServiceError):
    """Raised when merchant credentials or URLs are missing."""
    pass


class WeekNotFinalizedError(PaymentsServiceError):
    """Raised when requesting a payment link for an open week."""
    pass


class AlreadyPaidError(PaymentsServiceError):
    """Raised when requesting a payment link for a settled week."""
    pass


# =============================================================================
# Reconciliation rejections
# =============================================================================

class ReconciliationError(PaymentsServiceError):
    """Base for every reason an inbound payment notification is rejected."""
    pass


class InvalidSignatureError(ReconciliationError):
    """Raised when vnp_SecureHash is missing or does not match."""
    pass


class TransactionFailedError(ReconciliationError):
    """Raised when the gateway reports a non-success status."""
    pass


class InvalidNotificationError(ReconciliationError):
    """Raised when a required notification field is missing or malformed."""
    pass


class MemoFormatError(ReconciliationError):
    """Raised when the memo lacks the marker or the payer name."""
    pass


class MemoDateError(MemoFormatError):
    """Raised when the memo date is not a valid dd/mm/yyyy date."""
    pass


class PayerNotFoundError(ReconciliationError):
    """Raised when no member matches the memo name."""
    pass


class PaymentWeekNotFoundError(ReconciliationError):
    """Raised when no finalized week starts on the memo date."""
    pass


class NoChargesError(ReconciliationError):
    """Raised when the member has no order lines in the week."""
    pass


class AmountMismatchError(ReconciliationError):
    """Raised when the paid amount differs from the owed total."""

    def __init__(self, message, expected=None, received=None):
        super().__init__(message)
        self.expected = expected
        self.received = received
