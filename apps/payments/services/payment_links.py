"""
Payment links for members who still owe for a finalized week.

Links are signed gateway URLs; the same URL can be rendered as a QR code
for banking apps.
"""

from dataclasses import dataclass
from decimal import Decimal
from io import BytesIO
from uuid import UUID

import qrcode

from apps.members.services import get_member_by_id
from apps.payments.models import Payment
from apps.weeks.services import get_member_week_total, get_week_by_id

from .exceptions import AlreadyPaidError, NoChargesError, WeekNotFinalizedError
from .signing import PaymentUrlBuilder


@dataclass(frozen=True)
class PaymentLink:
    payment_url: str
    amount: Decimal
    memo: str
    txn_ref: str


def create_payment_link(
    *,
    builder: PaymentUrlBuilder,
    member_id: UUID,
    week_id: UUID,
    ip_address: str = '127.0.0.1',
) -> PaymentLink:
    """
    Build a signed link for the member's total in the week.

    Raises:
        MemberNotFoundError: If member doesn't exist
        WeekNotFoundError: If week doesn't exist
        WeekNotFinalizedError: If the week is still open
        NoChargesError: If the member has no lines in the week
        AlreadyPaidError: If the member already paid
    """
    member = get_member_by_id(member_id=member_id)
    week = get_week_by_id(week_id=week_id)

    if not week.is_finalized:
        raise WeekNotFinalizedError('This week has not been finalized yet')

    amount = get_member_week_total(member, week)
    if amount is None:
        raise NoChargesError('User has no orders in this week')

    if Payment.objects.filter(member=member, week=week, paid=True).exists():
        raise AlreadyPaidError(f"{member.name} has already paid for this week")

    params = builder.build_params(
        amount=amount,
        member_name=member.name,
        week_start=week.start_date,
        member_id=member.id,
        week_id=week.id,
        ip_address=ip_address,
    )

    return PaymentLink(
        payment_url=builder.url_for(params),
        amount=amount,
        memo=params['vnp_OrderInfo'],
        txn_ref=params['vnp_TxnRef'],
    )


def render_qr_png(data: str) -> bytes:
    """Encode data as a PNG QR code."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")
    buffer = BytesIO()
    img.save(buffer, format='PNG')
    return buffer.getvalue()
