"""Fold order-line charges into one total per member."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterable, List

from .money import round_money


@dataclass(frozen=True)
class ChargeLine:
    member_id: object
    member_name: str
    final_price: Decimal


@dataclass(frozen=True)
class MemberTotal:
    member_id: object
    member_name: str
    total_amount: Decimal


def aggregate_member_totals(lines: Iterable[ChargeLine]) -> List[MemberTotal]:
    """
    Sum final prices per member.

    Grouping is by member id. The first name seen for an id wins and the
    output keeps the order in which members first appear; callers that want
    another order must sort the result themselves.
    """
    names: Dict[object, str] = {}
    totals: Dict[object, Decimal] = {}

    for line in lines:
        if line.member_id not in totals:
            names[line.member_id] = line.member_name
            totals[line.member_id] = Decimal('0')
        totals[line.member_id] += Decimal(line.final_price)

    return [
        MemberTotal(
            member_id=member_id,
            member_name=names[member_id],
            total_amount=round_money(total),
        )
        for member_id, total in totals.items()
    ]


def charge_lines_for_items(items) -> List[ChargeLine]:
    """Adapt OrderItem instances (with ``member`` loaded) to charge lines."""
    return [
        ChargeLine(
            member_id=item.member_id,
            member_name=item.member.name,
            final_price=item.final_price,
        )
        for item in items
    ]
