import pytest
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.members.models import Member
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
    return Member.objects.create(name='An')


@pytest.fixture
def week(db):
    """Open week starting Monday 12/01/2026."""
    return Week.objects.create(start_date=date(2026, 1, 12), end_date=date(2026, 1, 16))
