import pytest
from datetime import date
from decimal import Decimal
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
def chi(db):
    return Member.objects.create(name='Chi')


@pytest.fixture
def open_week(db):
    """Week starting Monday 12/01/2026, still open."""
    return Week.objects.create(start_date=date(2026, 1, 12), end_date=date(2026, 1, 16))


@pytest.fixture
def finalized_week(db):
    """Week starting Monday 05/01/2026, already finalized."""
    week = Week.objects.create(start_date=date(2026, 1, 5), end_date=date(2026, 1, 9))
    week.finalize()
    return week


@pytest.fixture
def pho_dishes(an, binh, chi):
    """Two members share Pho at 50.000, one has Com at 30.000."""
    return [
        {'item_name': 'Pho', 'price': Decimal('50000'), 'member_ids': [an.id, binh.id]},
        {'item_name': 'Com', 'price': Decimal('30000'), 'member_ids': [chi.id]},
    ]


@pytest.fixture
def pho_order(open_week, pho_dishes):
    """Order of 130.000 paid 120.000 in the open week."""
    return create_order(
        week_id=open_week.id,
        description='Quan Pho 24',
        final_amount=Decimal('120000'),
        dishes=pho_dishes,
    )
