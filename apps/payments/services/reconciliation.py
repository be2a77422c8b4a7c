"""
Payment reconciliation.

Matches an inbound gateway notification to one member and one finalized
week and marks that member as paid. The reconciler knows nothing about
HTTP: it takes the notification fields as a mapping and either returns a
ReconciliationResult or raises a ReconciliationError subclass.

Checks run in this order, and the first failure wins:

    signature -> transaction status -> amount -> memo -> member -> week
    -> member's charges -> amount tolerance

Nothing is written until every check has passed, and the final write is an
upsert, so a re-delivered notification leaves exactly one paid row.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Mapping
from urllib.parse import unquote

from django.db import transaction

from apps.members.models import Member
from apps.members.services import find_member_by_name
from apps.orders.services import from_minor_units
from apps.payments.models import Payment
from apps.weeks.models import Week
from apps.weeks.services import get_member_week_total

from .exceptions import (
    AmountMismatchError,
    GatewayConfigurationError,
    InvalidNotificationError,
    InvalidSignatureError,
    NoChargesError,
    PayerNotFoundError,
    PaymentWeekNotFoundError,
    ReconciliationError,
    TransactionFailedError,
)
from .gateway_config import GatewayConfig
from .memo import MemoParser
from .signing import verify_signature

logger = logging.getLogger(__name__)

SUCCESS_CODE = '00'


@dataclass(frozen=True)
class ReconciliationResult:
    member: Member
    week: Week
    amount: Decimal
    payment: Payment


class PaymentReconciler:
    """
    Example:
        Handling a notification::

            reconciler = PaymentReconciler(GatewayConfig.from_settings())
            try:
                result = reconciler.reconcile(request.GET.dict())
            except ReconciliationError as e:
                ...
    """

    def __init__(self, config: GatewayConfig, memo_parser: MemoParser = None):
        self.config = config
        self.memo_parser = memo_parser or MemoParser()

    def _check_signature(self, fields):
        if not self.config.verify_signature:
            return
        if not self.config.hash_secret:
            raise GatewayConfigurationError(
                'Payment gateway is not configured: missing VNPAY_HASH_SECRET'
            )
        if not verify_signature(fields, self.config.hash_secret):
            raise InvalidSignatureError('Invalid signature')

    def _check_status(self, fields):
        if (fields.get('vnp_TransactionStatus') != SUCCESS_CODE
                or fields.get('vnp_ResponseCode') != SUCCESS_CODE):
            raise TransactionFailedError('Transaction failed')

    def _parse_amount(self, fields) -> Decimal:
        try:
            return from_minor_units(fields.get('vnp_Amount'))
        except ValueError as e:
            raise InvalidNotificationError(f"Invalid amount: {e}")

    def _resolve_week(self, week_start) -> Week:
        week = Week.objects.filter(start_date=week_start, is_finalized=True).first()
        if week is None:
            raise PaymentWeekNotFoundError('Week not found')
        return week

    def reconcile(self, fields: Mapping[str, str]) -> ReconciliationResult:
        """
        Validate a notification and mark the payer as paid.

        Raises:
            GatewayConfigurationError: If verification is on but no secret is set
            ReconciliationError: Any rejection, see the subclasses
        """
        fields = {key: str(value) for key, value in fields.items()}
        txn_ref = fields.get('vnp_TxnRef', '')

        try:
            self._check_signature(fields)
            self._check_status(fields)
            amount = self._parse_amount(fields)

            memo = unquote(fields.get('vnp_OrderInfo', ''))
            parsed = self.memo_parser.parse(memo)

            member = find_member_by_name(parsed.member_name)
            if member is None:
                raise PayerNotFoundError('User not found')

            week = self._resolve_week(parsed.week_start)

            expected = get_member_week_total(member, week)
            if expected is None:
                raise NoChargesError('User has no orders in this week')

            if abs(amount - expected) > self.config.amount_tolerance:
                raise AmountMismatchError(
                    f"Amount mismatch. Expected: {expected}, Received: {amount}",
                    expected=expected,
                    received=amount,
                )
        except ReconciliationError as e:
            logger.warning("Rejected payment notification %s: %s", txn_ref, e)
            raise

        with transaction.atomic():
            payment = Payment.upsert(member=member, week=week, paid=True)

        logger.info(
            "Payment %s reconciled: %s paid %s for week %s",
            txn_ref, member.name, amount, week.start_date,
        )
        return ReconciliationResult(member=member, week=week, amount=amount, payment=payment)
