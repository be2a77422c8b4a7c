import pytest
import uuid
from datetime import date, datetime
from decimal import Decimal
from django.utils import timezone
from apps.orders.services import create_order
from apps.payments.models import Payment
from apps.weeks.models import Week
from apps.weeks.services import (
    create_week,
    finalize_week,
    delete_week,
    list_weeks,
    weekday_name,
    build_week_ledger,
    get_member_week_total,
    is_week_all_paid,
    weeks_with_unpaid_members,
    find_unpaid_weeks,
    set_payment_status,
    InvalidWeekStartError,
    WeekOverlapError,
    WeekNotFoundError,
    WeekHasOrdersError,
)


@pytest.mark.django_db
class TestCreateWeek:
    """Tests for create_week()"""

    def test_monday_start(self):
        week = create_week(start_date=date(2026, 2, 2), name='  Tuan 6 ')

        assert week.end_date == date(2026, 2, 6)
        assert week.name == 'Tuan 6'
        assert week.is_finalized is False

    def test_blank_name_stored_as_none(self):
        week = create_week(start_date=date(2026, 2, 2), name='   ')

        assert week.name is None

    def test_tuesday_start_rejected(self):
        """06/01/2026 is a Tuesday."""
        with pytest.raises(InvalidWeekStartError) as exc:
            create_week(start_date=date(2026, 1, 6))

        assert exc.value.weekday_name == 'Thứ ba'
        assert 'Thứ hai' in str(exc.value)
        assert 'Thứ ba' in str(exc.value)
        assert Week.objects.count() == 0

    def test_same_start_rejected(self, empty_week):
        with pytest.raises(WeekOverlapError) as exc:
            create_week(start_date=empty_week.start_date)

        assert exc.value.existing == empty_week
        assert '19/01/2026' in str(exc.value)

    def test_adjacent_week_allowed(self, empty_week):
        week = create_week(start_date=date(2026, 1, 26))

        assert week.start_date == date(2026, 1, 26)

    def test_weekday_names(self):
        assert weekday_name(date(2026, 1, 5)) == 'Thứ hai'
        assert weekday_name(date(2026, 1, 11)) == 'Chủ nhật'


@pytest.mark.django_db
class TestFinalizeDeleteWeek:
    """Tests for finalize_week() and delete_week()"""

    def test_finalize(self, empty_week):
        week = finalize_week(week_id=empty_week.id)

        assert week.is_finalized is True
        assert week.finalized_at is not None

    def test_finalize_twice_keeps_timestamp(self, empty_week):
        first = finalize_week(week_id=empty_week.id).finalized_at
        second = finalize_week(week_id=empty_week.id).finalized_at

        assert first == second

    def test_finalize_unknown(self, db):
        with pytest.raises(WeekNotFoundError):
            finalize_week(week_id=uuid.uuid4())

    def test_delete_empty_week(self, empty_week):
        delete_week(week_id=empty_week.id)

        assert Week.objects.count() == 0

    def test_delete_week_with_orders_rejected(self, week_with_orders):
        with pytest.raises(WeekHasOrdersError) as exc:
            delete_week(week_id=week_with_orders.id)

        assert exc.value.order_count == 2
        assert Week.objects.filter(id=week_with_orders.id).exists()

    def test_list_weeks_counts_orders(self, week_with_orders, empty_week):
        weeks = list(list_weeks())

        assert weeks == [empty_week, week_with_orders]
        assert weeks[0].order_count == 0
        assert weeks[1].order_count == 2


@pytest.mark.django_db
class TestWeekLedger:
    """Tests for build_week_ledger() and friends"""

    def test_member_totals(self, week_with_orders, an, binh):
        ledger = build_week_ledger(week_with_orders)

        assert [(e.member_name, e.total_amount) for e in ledger.members] == [
            ('An', Decimal('43000.00')),
            ('Binh', Decimal('30000.00')),
        ]
        assert ledger.total_orders_amount == Decimal('73000.00')
        assert ledger.all_paid is False
        assert len(ledger.unpaid_members) == 2

    def test_all_paid(self, week_with_orders, an, binh):
        set_payment_status(member=an, week=week_with_orders, paid=True)
        set_payment_status(member=binh, week=week_with_orders, paid=True)

        assert is_week_all_paid(week_with_orders) is True

    def test_empty_week_is_not_all_paid(self, empty_week):
        ledger = build_week_ledger(empty_week)

        assert ledger.has_members is False
        assert ledger.all_paid is False

    def test_member_week_total(self, week_with_orders, empty_week, an):
        assert get_member_week_total(an, week_with_orders) == Decimal('43000.00')
        assert get_member_week_total(an, empty_week) is None

    def test_weeks_with_unpaid_members(self, week_with_orders, empty_week, an, binh):
        assert weeks_with_unpaid_members() == [week_with_orders]

        set_payment_status(member=an, week=week_with_orders, paid=True)
        set_payment_status(member=binh, week=week_with_orders, paid=True)

        assert weeks_with_unpaid_members() == []

    def test_weeks_with_unpaid_members_across_weeks(self, week_with_orders, empty_week, an, binh):
        create_order(
            week_id=empty_week.id,
            description='Pho',
            final_amount=Decimal('50000'),
            order_date=timezone.make_aware(datetime(2026, 1, 19, 12, 0)),
            dishes=[{'item_name': 'Pho', 'price': Decimal('50000'), 'member_ids': [an.id]}],
        )
        set_payment_status(member=an, week=week_with_orders, paid=True)

        assert weeks_with_unpaid_members() == [empty_week, week_with_orders]

        set_payment_status(member=binh, week=week_with_orders, paid=True)

        assert weeks_with_unpaid_members() == [empty_week]

    def test_weeks_with_unpaid_members_query_count(self, week_with_orders, empty_week, django_assert_max_num_queries):
        with django_assert_max_num_queries(3):
            assert weeks_with_unpaid_members() == [week_with_orders]


@pytest.mark.django_db
class TestPaymentStatus:
    """Tests for set_payment_status() and find_unpaid_weeks()"""

    def test_mark_paid_then_unpaid(self, week_with_orders, an):
        payment = set_payment_status(member=an, week=week_with_orders, paid=True)
        assert payment.paid is True
        assert payment.paid_at is not None

        payment = set_payment_status(member=an, week=week_with_orders, paid=False)
        assert payment.paid is False
        assert payment.paid_at is None
        assert Payment.objects.filter(member=an, week=week_with_orders).count() == 1

    def test_find_unpaid_weeks(self, week_with_orders, an):
        results = find_unpaid_weeks(name='an')

        assert len(results) == 1
        assert results[0]['week'] == week_with_orders
        assert results[0]['member'] == an
        assert results[0]['amount'] == Decimal('43000.00')

    def test_find_unpaid_weeks_diacritic_name(self, week_with_orders, an):
        an.name = 'Đức'
        an.save()

        results = find_unpaid_weeks(name='ĐỨC')

        assert [r['member'] for r in results] == [an]

    def test_paid_week_not_listed(self, week_with_orders, an):
        set_payment_status(member=an, week=week_with_orders, paid=True)

        assert find_unpaid_weeks(name='An') == []

    def test_open_week_not_listed(self, week_with_orders, an):
        Week.objects.filter(id=week_with_orders.id).update(is_finalized=False)

        assert find_unpaid_weeks(name='An') == []

    @pytest.mark.parametrize('name', ['', '   ', 'Nobody'])
    def test_unknown_name(self, week_with_orders, name):
        assert find_unpaid_weeks(name=name) == []
