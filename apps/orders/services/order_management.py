"""
Order management service.

Creates, edits and deletes lunch orders. Each write runs the split
calculator first, so an invalid bill never reaches the database, and then
persists the order and its lines in one transaction.

Example:
    Creating an order for the current week::

        from apps.orders.services import create_order

        order = create_order(
            week_id=week.id,
            description='Quan Pho 24',
            final_amount=Decimal('120000'),
            dishes=[
                {'item_name': 'Pho', 'price': Decimal('50000'), 'member_ids': [an.id, binh.id]},
                {'item_name': 'Com', 'price': Decimal('30000'), 'member_ids': [chi.id]},
            ],
        )
        order.items.count()   # 3
"""

import logging
from typing import Iterable, List, Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.members.models import Member
from apps.orders.models import Order, OrderItem
from apps.weeks.models import Week

from .exceptions import (
    OrderMemberNotFoundError,
    OrderNotFoundError,
    OrderValidationError,
    OrderWeekNotFoundError,
    WeekFinalizedError,
)
from .split_calculation import Dish, OrderSplit, expand_dishes, split_order

logger = logging.getLogger(__name__)


def _clean_description(description: Optional[str]) -> str:
    description = (description or '').strip()
    if not description:
        raise OrderValidationError('Please enter an order description.')
    return description


def _resolve_dishes(dishes: Iterable[dict]) -> List[Dish]:
    """
    Turn dish payloads into Dish records with member names loaded.

    Raises:
        OrderMemberNotFoundError: If any member id is unknown
    """
    dishes = list(dishes)
    wanted = {
        str(member_id)
        for dish in dishes
        for member_id in dish.get('member_ids', [])
    }
    members = {
        str(member.id): member
        for member in Member.objects.filter(id__in=wanted)
    }

    missing = sorted(wanted - set(members))
    if missing:
        raise OrderMemberNotFoundError(f"Members not found: {', '.join(missing)}")

    resolved = []
    for dish in dishes:
        item_name = (dish.get('item_name') or '').strip()
        if not item_name:
            raise OrderValidationError('Every dish needs a name.')
        resolved.append(Dish(
            item_name=item_name,
            price=dish['price'],
            members=tuple(
                (members[str(member_id)].id, members[str(member_id)].name)
                for member_id in dish.get('member_ids', [])
            ),
        ))
    return resolved


def _calculate(dishes: Iterable[dict], final_amount) -> OrderSplit:
    entries = expand_dishes(_resolve_dishes(dishes))
    return split_order(entries, final_amount)


def _write_lines(order: Order, split: OrderSplit) -> None:
    OrderItem.objects.bulk_create([
        OrderItem(
            order=order,
            member_id=line.member_id,
            line_number=number,
            item_name=line.item_name,
            price=line.price,
            discount_share=line.discount_share,
            final_price=line.final_price,
        )
        for number, line in enumerate(split.lines, start=1)
    ])


def get_order_by_id(*, order_id: UUID) -> Order:
    """
    Get an order by ID.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        return Order.objects.select_related('week').get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")


@transaction.atomic
def create_order(
    *,
    week_id: UUID,
    description: str,
    final_amount,
    dishes: Iterable[dict],
    order_date=None,
) -> Order:
    """
    Create an order with one line per (dish, member).

    Args:
        week_id: Week the order belongs to; must be open
        description: Restaurant or order label
        final_amount: Amount actually paid for the whole bill
        dishes: Dicts with ``item_name``, ``price`` and ``member_ids``
        order_date: Defaults to now

    Returns:
        Created Order

    Raises:
        OrderWeekNotFoundError: If week doesn't exist
        WeekFinalizedError: If week is finalized
        OrderValidationError: If description, dishes or amounts are invalid
        OrderMemberNotFoundError: If a member doesn't exist
    """
    description = _clean_description(description)

    try:
        week = Week.objects.select_for_update().get(id=week_id)
    except Week.DoesNotExist:
        raise OrderWeekNotFoundError(f"Week with ID {week_id} not found")

    if week.is_finalized:
        raise WeekFinalizedError('Cannot add orders to a finalized week.')

    split = _calculate(dishes, final_amount)

    order = Order.objects.create(
        week=week,
        description=description,
        total_amount=split.total_items_price,
        discount=split.discount,
        final_amount=split.final_amount,
        order_date=order_date or timezone.now(),
    )
    _write_lines(order, split)

    logger.info(
        "Order %s created in week %s: %d lines, discount %s",
        order.id, week.start_date, split.line_count, split.discount,
    )
    return order


@transaction.atomic
def update_order(
    *,
    order_id: UUID,
    week_id: UUID,
    description: str,
    final_amount,
    dishes: Iterable[dict],
    order_date=None,
) -> Order:
    """
    Replace an order's header and all of its lines.

    The target week must be open, unless it is the week the order already
    belongs to. Lines are deleted and recreated, never merged.

    Raises:
        OrderNotFoundError: If order doesn't exist
        OrderWeekNotFoundError: If week doesn't exist
        WeekFinalizedError: If moving into a finalized week
        OrderValidationError: If description, dishes or amounts are invalid
        OrderMemberNotFoundError: If a member doesn't exist
    """
    description = _clean_description(description)

    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    try:
        week = Week.objects.get(id=week_id)
    except Week.DoesNotExist:
        raise OrderWeekNotFoundError(f"Week with ID {week_id} not found")

    if week.is_finalized and week.id != order.week_id:
        raise WeekFinalizedError('Cannot move an order into a finalized week.')

    split = _calculate(dishes, final_amount)

    order.week = week
    order.description = description
    order.total_amount = split.total_items_price
    order.discount = split.discount
    order.final_amount = split.final_amount
    if order_date is not None:
        order.order_date = order_date
    order.save()

    order.items.all().delete()
    _write_lines(order, split)

    logger.info("Order %s updated: %d lines", order.id, split.line_count)
    return order


@transaction.atomic
def delete_order(*, order_id: UUID) -> None:
    """
    Delete an order and its lines.

    Raises:
        OrderNotFoundError: If order doesn't exist
    """
    try:
        order = Order.objects.select_for_update().get(id=order_id)
    except Order.DoesNotExist:
        raise OrderNotFoundError(f"Order with ID {order_id} not found")

    order.delete()
    logger.info("Order %s deleted", order_id)


def get_order_dishes(order: Order) -> List[dict]:
    """
    Group an order's lines back into dishes.

    Lines sharing an item name become one dish listing every member who
    ordered it, in line order. Used to prefill the edit form.
    """
    dishes = {}
    items = order.items.select_related('member').order_by('line_number')
    for item in items:
        dish = dishes.setdefault(item.item_name, {
            'item_name': item.item_name,
            'price': item.price,
            'members': [],
        })
        dish['members'].append({'id': item.member_id, 'name': item.member.name})
    return list(dishes.values())
