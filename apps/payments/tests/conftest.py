import pytest
from datetime import date, datetime
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from apps.members.models import Member
from apps.orders.services import create_order
from apps.payments.services import GatewayConfig, sign_params
from apps.weeks.models import Week

SECRET = 'TESTSECRETKEY1234567890'


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def gateway_config():
    """Signing config matching the test settings."""
    return GatewayConfig(
        tmn_code='TESTTMN1',
        hash_secret=SECRET,
        return_url='http://testserver/api/payments/vnpay/return/',
    )


@pytest.fixture
def an(db):
    return Member.objects.create(name='Nguyen Van A')


@pytest.fixture
def binh(db):
    return Member.objects.create(name='Binh')


def _order(week, description, final_amount, day, dishes):
    return create_order(
        week_id=week.id,
        description=description,
        final_amount=Decimal(final_amount),
        order_date=timezone.make_aware(datetime(2026, 1, day, 12, 0)),
        dishes=dishes,
    )


@pytest.fixture
def finalized_week(an, binh):
    """
    Finalized week starting Monday 12/01/2026.

    Nguyen Van A owes 130.000, Binh owes 30.000.
    """
    week = Week.objects.create(start_date=date(2026, 1, 12), end_date=date(2026, 1, 16))
    _order(week, 'Com Trua', '60000', 12, [
        {'item_name': 'Com Ga', 'price': Decimal('30000'), 'member_ids': [an.id, binh.id]},
    ])
    _order(week, 'Lau', '100000', 14, [
        {'item_name': 'Lau Thai', 'price': Decimal('100000'), 'member_ids': [an.id]},
    ])
    week.finalize()
    return week


@pytest.fixture
def open_week(an):
    """Week starting Monday 19/01/2026 that has orders but is not finalized."""
    week = Week.objects.create(start_date=date(2026, 1, 19), end_date=date(2026, 1, 23))
    _order(week, 'Pho', '50000', 19, [
        {'item_name': 'Pho', 'price': Decimal('50000'), 'member_ids': [an.id]},
    ])
    return week


@pytest.fixture
def notification():
    """
    Factory for signed gateway notification fields.

    Keyword arguments override individual fields before signing.
    """
    def make(memo='Nguyen Van A tien com 12/01/2026', amount=13000000, sign=True, **overrides):
        fields = {
            'vnp_Amount': str(amount),
            'vnp_BankCode': 'NCB',
            'vnp_OrderInfo': memo,
            'vnp_PayDate': '20260119103000',
            'vnp_ResponseCode': '00',
            'vnp_TmnCode': 'TESTTMN1',
            'vnp_TransactionNo': '14123456',
            'vnp_TransactionStatus': '00',
            'vnp_TxnRef': '1768793400000',
        }
        fields.update(overrides)
        if sign:
            fields['vnp_SecureHashType'] = 'HmacSHA512'
            fields['vnp_SecureHash'] = sign_params(fields, SECRET)
        return fields
    return make
