import pytest
from datetime import date, datetime
from decimal import Decimal
from django.utils import timezone
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.members.models import Member
from apps.orders.services import create_order
from apps.weeks.models import Week


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def admin_user(db):
    """Create and return an administrator."""
    return User.objects.create_user(username='Admin', password='TestPass123!', is_staff=True)


@pytest.fixture
def admin_client(api_client, admin_user):
    """Return an API client authenticated as administrator."""
    refresh = RefreshToken.for_user(admin_user)
    api_client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return api_client


@pytest.fixture
def an(db):
    return Member.objects.create(name='An')


@pytest.fixture
def binh(db):
    return Member.objects.create(name='Binh')


@pytest.fixture
def empty_week(db):
    """Week starting Monday 19/01/2026 without orders."""
    return Week.objects.create(start_date=date(2026, 1, 19), end_date=date(2026, 1, 23))


@pytest.fixture
def week_with_orders(an, binh):
    """
    Finalized week starting Monday 12/01/2026.

    An owes 43.000 over two orders, Binh owes 30.000.
    """
    week = Week.objects.create(start_date=date(2026, 1, 12), end_date=date(2026, 1, 16))
    create_order(
        week_id=week.id,
        description='Bun Bo',
        final_amount=Decimal('60000'),
        order_date=timezone.make_aware(datetime(2026, 1, 12, 12, 0)),
        dishes=[{'item_name': 'Bun Bo', 'price': Decimal('30000'), 'member_ids': [an.id, binh.id]}],
    )
    create_order(
        week_id=week.id,
        description='Banh Mi',
        final_amount=Decimal('13000'),
        order_date=timezone.make_aware(datetime(2026, 1, 13, 12, 0)),
        dishes=[{'item_name': 'Banh Mi', 'price': Decimal('15000'), 'member_ids': [an.id]}],
    )
    week.finalize()
    return week
