"""
Order split calculator.

Turns the dishes of one order into per-member lines and spreads the pooled
discount over them.

The discount is the difference between the undiscounted price of every line
and the amount actually paid to the restaurant. It is divided evenly per
*line*, not per dish and not by price weight: the member who ordered a cheap
dish gets the same absolute discount as the member who ordered an expensive
one. Reconciliation tolerances assume exactly this distribution.

Example:
    Two members share "Pho" at 50.000 and one orders "Com" at 30.000; the
    restaurant bill is 120.000::

        lines = expand_dishes([
            Dish('Pho', Decimal('50000'), [(u1.id, 'An'), (u2.id, 'Binh')]),
            Dish('Com', Decimal('30000'), [(u3.id, 'Chi')]),
        ])
        split = split_order(lines, final_amount=Decimal('120000'))
        split.discount            # Decimal('10000.00')
        split.discount_per_line   # Decimal('3333.33')
        [line.final_price for line in split.lines]
        # [Decimal('46666.67'), Decimal('46666.67'), Decimal('26666.67')]
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, List, Sequence, Tuple

from .exceptions import EmptyOrderError, InvalidFinalAmountError, OrderValidationError
from .money import format_currency, round_money


@dataclass(frozen=True)
class Dish:
    """One dish on the bill and the members who ordered it."""

    item_name: str
    price: Decimal
    members: Sequence[Tuple[object, str]] = field(default_factory=tuple)


@dataclass(frozen=True)
class LineEntry:
    """One member's copy of one dish, at the undiscounted unit price."""

    member_id: object
    member_name: str
    item_name: str
    price: Decimal


@dataclass(frozen=True)
class SplitLine:
    member_id: object
    member_name: str
    item_name: str
    price: Decimal
    discount_share: Decimal
    final_price: Decimal


@dataclass(frozen=True)
class OrderSplit:
    total_items_price: Decimal
    final_amount: Decimal
    discount: Decimal
    discount_per_line: Decimal
    lines: Tuple[SplitLine, ...]

    @property
    def line_count(self) -> int:
        return len(self.lines)


def calculate_discount(total_items_price, final_amount) -> Decimal:
    """Discount = total items price - amount paid, rounded to cents."""
    return round_money(Decimal(total_items_price) - Decimal(final_amount))


def calculate_discount_per_line(discount, line_count: int) -> Decimal:
    """Even share of the discount per line; zero when there are no lines."""
    if line_count == 0:
        return round_money(0)
    return round_money(Decimal(discount) / line_count)


def calculate_final_price(price, discount_per_line) -> Decimal:
    return round_money(Decimal(price) - Decimal(discount_per_line))


def expand_dishes(dishes: Iterable[Dish]) -> List[LineEntry]:
    """
    Expand dishes into one line entry per ordering member.

    A dish ordered by k members yields k entries that share the item name
    and the full unit price.

    Raises:
        OrderValidationError: If a dish has no members or a non-positive price.
    """
    entries = []
    for dish in dishes:
        if not dish.members:
            raise OrderValidationError(
                f'Dish "{dish.item_name}" has no members. Select at least one member.'
            )
        price = round_money(dish.price)
        if price <= 0:
            raise OrderValidationError(
                f'Dish "{dish.item_name}" must have a price greater than 0.'
            )
        for member_id, member_name in dish.members:
            entries.append(LineEntry(
                member_id=member_id,
                member_name=member_name,
                item_name=dish.item_name,
                price=price,
            ))
    return entries


def split_order(entries: Sequence[LineEntry], final_amount) -> OrderSplit:
    """
    Compute the discount and per-line final prices for one order.

    Args:
        entries: Line entries as produced by ``expand_dishes``.
        final_amount: The amount actually payable for the whole order.

    Returns:
        OrderSplit with one SplitLine per entry, in input order.

    Raises:
        EmptyOrderError: If there are no entries.
        InvalidFinalAmountError: If final_amount is not in (0, total].
    """
    if not entries:
        raise EmptyOrderError('Add at least one dish and select who ordered it.')

    final_amount = round_money(final_amount)
    total_items_price = round_money(sum((e.price for e in entries), Decimal('0')))

    if final_amount <= 0:
        raise InvalidFinalAmountError('The payable amount must be greater than 0.')
    if final_amount > total_items_price:
        raise InvalidFinalAmountError(
            f"The payable amount ({format_currency(final_amount)}) cannot exceed "
            f"the total price of the dishes ({format_currency(total_items_price)})."
        )

    discount = calculate_discount(total_items_price, final_amount)
    discount_per_line = calculate_discount_per_line(discount, len(entries))

    lines = tuple(
        SplitLine(
            member_id=entry.member_id,
            member_name=entry.member_name,
            item_name=entry.item_name,
            price=entry.price,
            discount_share=discount_per_line,
            final_price=calculate_final_price(entry.price, discount_per_line),
        )
        for entry in entries
    )

    return OrderSplit(
        total_items_price=total_items_price,
        final_amount=final_amount,
        discount=discount,
        discount_per_line=discount_per_line,
        lines=lines,
    )
