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
def member(db):
    """Create and return a member without orders."""
    return Member.objects.create(name='Nguyen Van A', email='a@example.com')


@pytest.fixture
def other_member(db):
    return Member.objects.create(name='Tran Thi B')


@pytest.fixture
def member_with_order(member, other_member):
    """Member who owns two order lines; other_member owns one."""
    week = Week.objects.create(start_date=date(2026, 1, 12), end_date=date(2026, 1, 16))
    create_order(
        week_id=week.id,
        description='Com Van Phong',
        final_amount=Decimal('72000'),
        dishes=[
            {'item_name': 'Com Ga', 'price': Decimal('35000'), 'member_ids': [member.id, other_member.id]},
            {'item_name': 'Tra Da', 'price': Decimal('5000'), 'member_ids': [member.id]},
        ],
    )
    return member
