import pytest
from datetime import date
from decimal import Decimal
from apps.orders.services import (
    ChargeLine,
    MemberTotal,
    aggregate_member_totals,
    format_currency,
    format_date,
    from_minor_units,
    to_minor_units,
)


class TestAggregateMemberTotals:
    """Tests for aggregate_member_totals()"""

    LINES = [
        ChargeLine('u2', 'Binh', Decimal('46666.67')),
        ChargeLine('u1', 'An', Decimal('46666.67')),
        ChargeLine('u2', 'Binh (renamed)', Decimal('26666.67')),
        ChargeLine('u3', 'Chi', Decimal('0.01')),
    ]

    def test_sums_per_member_in_first_seen_order(self):
        totals = aggregate_member_totals(self.LINES)

        assert totals == [
            MemberTotal('u2', 'Binh', Decimal('73333.34')),
            MemberTotal('u1', 'An', Decimal('46666.67')),
            MemberTotal('u3', 'Chi', Decimal('0.01')),
        ]

    def test_first_name_wins(self):
        totals = aggregate_member_totals(self.LINES)

        assert totals[0].member_name == 'Binh'

    def test_idempotent(self):
        """Same input, same output, order included."""
        assert aggregate_member_totals(self.LINES) == aggregate_member_totals(self.LINES)

    def test_empty_input(self):
        assert aggregate_member_totals([]) == []

    def test_total_is_rounded(self):
        totals = aggregate_member_totals([
            ChargeLine('u1', 'An', Decimal('0.004')),
            ChargeLine('u1', 'An', Decimal('0.001')),
        ])

        assert totals[0].total_amount == Decimal('0.01')


class TestMoney:
    """Tests for minor-unit conversion and display helpers."""

    def test_to_minor_units(self):
        assert to_minor_units(Decimal('73333.34')) == 7333334

    def test_from_minor_units(self):
        assert from_minor_units('7333334') == Decimal('73333.34')

    @pytest.mark.parametrize('value', [None, '', 'abc', 'NaN'])
    def test_from_minor_units_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            from_minor_units(value)

    def test_format_currency(self):
        assert format_currency(Decimal('130000')) == '130.000 ₫'
        assert format_currency(Decimal('46666.67')) == '46.667 ₫'

    def test_format_date(self):
        assert format_date(date(2026, 1, 5)) == '05/01/2026'
