"""
Orders app services layer.

Services contain business logic and orchestrate operations across models.
The money, split and aggregation modules are pure and never touch the
database.
"""

from .exceptions import (
    OrdersServiceError,
    OrderValidationError,
    EmptyOrderError,
    InvalidFinalAmountError,
    OrderNotFoundError,
    OrderWeekNotFoundError,
    WeekFinalizedError,
    OrderMemberNotFoundError,
)

from .money import (
    round_money,
    to_minor_units,
    from_minor_units,
    format_currency,
    format_date,
)

from .split_calculation import (
    Dish,
    LineEntry,
    SplitLine,
    OrderSplit,
    calculate_discount,
    calculate_discount_per_line,
    calculate_final_price,
    expand_dishes,
    split_order,
)

from .aggregation import (
    ChargeLine,
    MemberTotal,
    aggregate_member_totals,
    charge_lines_for_items,
)

from .order_management import (
    create_order,
    update_order,
    delete_order,
    get_order_by_id,
    get_order_dishes,
)


__all__ = [
    # Exceptions
    'OrdersServiceError',
    'OrderValidationError',
    'EmptyOrderError',
    'InvalidFinalAmountError',
    'OrderNotFoundError',
    'OrderWeekNotFoundError',
    'WeekFinalizedError',
    'OrderMemberNotFoundError',

    # Money
    'round_money',
    'to_minor_units',
    'from_minor_units',
    'format_currency',
    'format_date',

    # Split Calculation
    'Dish',
    'LineEntry',
    'SplitLine',
    'OrderSplit',
    'calculate_discount',
    'calculate_discount_per_line',
    'calculate_final_price',
    'expand_dishes',
    'split_order',

    # Aggregation
    'ChargeLine',
    'MemberTotal',
    'aggregate_member_totals',
    'charge_lines_for_items',

    # Order Management
    'create_order',
    'update_order',
    'delete_order',
    'get_order_by_id',
    'get_order_dishes',
]
