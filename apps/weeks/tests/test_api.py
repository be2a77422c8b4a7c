import pytest
import uuid
from django.urls import reverse
from rest_framework import status
from apps.payments.models import Payment
from apps.weeks.models import Week


@pytest.mark.django_db
class TestWeekCreate:
    """Tests for POST /api/weeks/"""

    def test_create(self, admin_client):
        url = reverse('weeks:week-list')
        response = admin_client.post(url, {'start_date': '2026-02-02'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['end_date'] == '2026-02-06'
        assert response.data['label'] == '02/02/2026 - 06/02/2026'

    def test_not_monday(self, admin_client):
        url = reverse('weeks:week-list')
        response = admin_client.post(url, {'start_date': '2026-01-06'}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Thứ ba' in response.data['error']

    def test_overlap(self, admin_client, empty_week):
        url = reverse('weeks:week-list')
        response = admin_client.post(url, {'start_date': '2026-01-19'}, format='json')

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_requires_authentication(self, api_client, db):
        url = reverse('weeks:week-list')
        response = api_client.post(url, {'start_date': '2026-02-02'}, format='json')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestWeekActions:
    """Tests for finalize, delete, ledger and payments"""

    def test_list(self, admin_client, week_with_orders, empty_week):
        url = reverse('weeks:week-list')
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [w['order_count'] for w in response.data] == [0, 2]

    def test_finalize(self, admin_client, empty_week):
        url = reverse('weeks:week-finalize', kwargs={'pk': empty_week.id})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['is_finalized'] is True

    def test_finalize_unknown(self, admin_client):
        url = reverse('weeks:week-finalize', kwargs={'pk': uuid.uuid4()})
        response = admin_client.post(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_delete_with_orders(self, admin_client, week_with_orders):
        url = reverse('weeks:week-detail', kwargs={'pk': week_with_orders.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['order_count'] == 2

    def test_delete_empty(self, admin_client, empty_week):
        url = reverse('weeks:week-detail', kwargs={'pk': empty_week.id})
        response = admin_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert Week.objects.count() == 0

    def test_ledger(self, admin_client, week_with_orders):
        url = reverse('weeks:week-ledger', kwargs={'pk': week_with_orders.id})
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['total_orders_amount'] == '73000.00'
        assert response.data['members'][0]['member_name'] == 'An'
        assert response.data['members'][0]['total_amount'] == '43000.00'
        assert response.data['all_paid'] is False

    def test_mark_paid(self, admin_client, week_with_orders, an):
        url = reverse('weeks:week-payments', kwargs={'pk': week_with_orders.id})
        response = admin_client.post(url, {'member': str(an.id), 'paid': True}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['paid'] is True
        assert Payment.objects.get(member=an, week=week_with_orders).paid is True

    def test_mark_paid_unknown_member(self, admin_client, week_with_orders):
        url = reverse('weeks:week-payments', kwargs={'pk': week_with_orders.id})
        response = admin_client.post(url, {'member': str(uuid.uuid4()), 'paid': True}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.django_db
class TestDashboard:
    """Tests for GET /api/weeks/dashboard/"""

    def test_admin_sees_all_weeks(self, admin_client, week_with_orders, empty_week):
        url = reverse('weeks:week-dashboard')
        response = admin_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['weeks']) == 2
        assert response.data['selected_week']['id'] == str(empty_week.id)

    def test_anonymous_sees_only_unpaid_weeks(self, api_client, week_with_orders, empty_week):
        url = reverse('weeks:week-dashboard')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [w['id'] for w in response.data['weeks']] == [str(week_with_orders.id)]
        assert response.data['ledger']['members'][1]['member_name'] == 'Binh'
        assert [o['description'] for o in response.data['orders']] == ['Banh Mi', 'Bun Bo']

    def test_selected_week(self, admin_client, week_with_orders, empty_week):
        url = reverse('weeks:week-dashboard')
        response = admin_client.get(url, {'week': str(week_with_orders.id)})

        assert response.data['selected_week']['id'] == str(week_with_orders.id)
        assert len(response.data['orders']) == 2

    def test_no_weeks(self, api_client, db):
        url = reverse('weeks:week-dashboard')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['weeks'] == []
        assert response.data['selected_week'] is None
