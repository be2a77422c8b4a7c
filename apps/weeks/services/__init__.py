"""
Weeks app services layer.

Services contain business logic and orchestrate operations across models.
"""

from .exceptions import (
    WeeksServiceError,
    WeekValidationError,
    InvalidWeekStartError,
    WeekOverlapError,
    WeekNotFoundError,
    WeekHasOrdersError,
)

from .week_management import (
    WEEKDAY_NAMES,
    weekday_name,
    create_week,
    finalize_week,
    delete_week,
    get_week_by_id,
    list_weeks,
)

from .week_ledger import (
    MemberLedgerEntry,
    WeekLedger,
    get_week_member_totals,
    get_member_week_total,
    build_week_ledger,
    is_week_all_paid,
    weeks_with_unpaid_members,
    find_unpaid_weeks,
    set_payment_status,
)


__all__ = [
    # Exceptions
    'WeeksServiceError',
    'WeekValidationError',
    'InvalidWeekStartError',
    'WeekOverlapError',
    'WeekNotFoundError',
    'WeekHasOrdersError',

    # Week Management
    'WEEKDAY_NAMES',
    'weekday_name',
    'create_week',
    'finalize_week',
    'delete_week',
    'get_week_by_id',
    'list_weeks',

    # Ledger
    'MemberLedgerEntry',
    'WeekLedger',
    'get_week_member_totals',
    'get_member_week_total',
    'build_week_ledger',
    'is_week_all_paid',
    'weeks_with_unpaid_members',
    'find_unpaid_weeks',
    'set_payment_status',
]
