"""
Week ledger.

Per-member totals and payment state for a week. Nothing here is stored:
totals are recomputed from order lines on every read, so an edited order is
reflected immediately.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from django.db import transaction
from django.db.models import Sum

from apps.members.models import Member
from apps.orders.models import OrderItem
from apps.orders.services import (
    MemberTotal,
    aggregate_member_totals,
    charge_lines_for_items,
    round_money,
)
from apps.payments.models import Payment
from apps.weeks.models import Week


@dataclass(frozen=True)
class MemberLedgerEntry:
    member_id: object
    member_name: str
    total_amount: Decimal
    paid: bool
    paid_at: Optional[datetime]


@dataclass(frozen=True)
class WeekLedger:
    week: Week
    members: List[MemberLedgerEntry]
    total_orders_amount: Decimal

    @property
    def has_members(self) -> bool:
        return bool(self.members)

    @property
    def all_paid(self) -> bool:
        """True only when the week has charged members and all of them paid."""
        return self.has_members and all(entry.paid for entry in self.members)

    @property
    def unpaid_members(self) -> List[MemberLedgerEntry]:
        return [entry for entry in self.members if not entry.paid]


def _week_items(week: Week):
    return (
        OrderItem.objects
        .filter(order__week=week)
        .select_related('member')
        .order_by('-order__order_date', '-order__created_at', 'line_number')
    )


def get_week_member_totals(week: Week) -> List[MemberTotal]:
    """Aggregated totals for every member charged in the week."""
    return aggregate_member_totals(charge_lines_for_items(_week_items(week)))


def get_member_week_total(member: Member, week: Week) -> Optional[Decimal]:
    """The member's total for the week, or None when they have no lines."""
    items = _week_items(week).filter(member=member)
    totals = aggregate_member_totals(charge_lines_for_items(items))
    if not totals:
        return None
    return totals[0].total_amount


def build_week_ledger(week: Week) -> WeekLedger:
    """Member totals joined with payment state, plus the orders' sum."""
    payments = {
        payment.member_id: payment
        for payment in Payment.objects.filter(week=week)
    }

    entries = []
    for total in get_week_member_totals(week):
        payment = payments.get(total.member_id)
        entries.append(MemberLedgerEntry(
            member_id=total.member_id,
            member_name=total.member_name,
            total_amount=total.total_amount,
            paid=bool(payment and payment.paid),
            paid_at=payment.paid_at if payment else None,
        ))

    orders_sum = week.orders.aggregate(total=Sum('final_amount'))['total']

    return WeekLedger(
        week=week,
        members=entries,
        total_orders_amount=round_money(orders_sum or 0),
    )


def is_week_all_paid(week: Week) -> bool:
    return build_week_ledger(week).all_paid


def weeks_with_unpaid_members():
    """Weeks, newest first, where at least one charged member has not paid."""
    charged = (
        OrderItem.objects
        .order_by()
        .values_list('order__week_id', 'member_id')
        .distinct()
    )
    paid = set(
        Payment.objects.filter(paid=True).values_list('week_id', 'member_id')
    )
    week_ids = {week_id for week_id, member_id in charged if (week_id, member_id) not in paid}
    return list(Week.objects.filter(id__in=week_ids).order_by('-start_date'))


def find_unpaid_weeks(*, name: str) -> List[dict]:
    """
    Finalized weeks a member still owes for.

    Args:
        name: Member name, matched case-insensitively and exactly

    Returns:
        Dicts with ``week``, ``member`` and ``amount``, newest week first.
        Empty when the name is blank or unknown.
    """
    name = (name or '').strip()
    if not name:
        return []

    members = list(Member.objects.filter(name_normalized=Member.normalize_name(name)))
    if not members:
        return []

    results = []
    for member in members:
        for week in Week.objects.filter(is_finalized=True).order_by('-start_date'):
            amount = get_member_week_total(member, week)
            if amount is None:
                continue
            paid = Payment.objects.filter(member=member, week=week, paid=True).exists()
            if not paid:
                results.append({'week': week, 'member': member, 'amount': amount})
    return results


@transaction.atomic
def set_payment_status(*, member: Member, week: Week, paid: bool) -> Payment:
    """Record a member as paid or unpaid for a week (admin override)."""
    return Payment.upsert(member=member, week=week, paid=paid)
