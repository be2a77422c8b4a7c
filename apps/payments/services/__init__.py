"""
Payments app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    PaymentsServiceError,
    GatewayConfigurationError,
    WeekNotFinalizedError,
    AlreadyPaidError,
    ReconciliationError,
    InvalidSignatureError,
    TransactionFailedError,
    InvalidNotificationError,
    MemoFormatError,
    MemoDateError,
    PayerNotFoundError,
    PaymentWeekNotFoundError,
    NoChargesError,
    AmountMismatchError,
)

from .gateway_config import GatewayConfig

from .memo import (
    MARKER,
    MemoParser,
    ParsedMemo,
    build_memo,
)

from .signing import (
    PaymentUrlBuilder,
    canonical_query,
    sign_params,
    build_signed_query,
    verify_signature,
)

from .reconciliation import (
    PaymentReconciler,
    ReconciliationResult,
)

from .payment_links import (
    PaymentLink,
    create_payment_link,
    render_qr_png,
)


__all__ = [
    # Exceptions
    'PaymentsServiceError',
    'GatewayConfigurationError',
    'WeekNotFinalizedError',
    'AlreadyPaidError',
    'ReconciliationError',
    'InvalidSignatureError',
    'TransactionFailedError',
    'InvalidNotificationError',
    'MemoFormatError',
    'MemoDateError',
    'PayerNotFoundError',
    'PaymentWeekNotFoundError',
    'NoChargesError',
    'AmountMismatchError',

    # Configuration
    'GatewayConfig',

    # Memo
    'MARKER',
    'MemoParser',
    'ParsedMemo',
    'build_memo',

    # Signing
    'PaymentUrlBuilder',
    'canonical_query',
    'sign_params',
    'build_signed_query',
    'verify_signature',

    # Reconciliation
    'PaymentReconciler',
    'ReconciliationResult',

    # Payment Links
    'PaymentLink',
    'create_payment_link',
    'render_qr_png',
]
