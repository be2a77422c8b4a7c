import pytest
from dataclasses import replace
from decimal import Decimal
from apps.members.models import Member
from apps.payments.models import Payment
from apps.payments.services import (
    AmountMismatchError,
    GatewayConfigurationError,
    InvalidNotificationError,
    InvalidSignatureError,
    MemoDateError,
    MemoFormatError,
    NoChargesError,
    PayerNotFoundError,
    PaymentReconciler,
    PaymentWeekNotFoundError,
    TransactionFailedError,
)


@pytest.mark.django_db
class TestReconcileSuccess:
    """Notifications that mark the payer as paid."""

    def test_exact_amount(self, gateway_config, notification, finalized_week, an):
        result = PaymentReconciler(gateway_config).reconcile(notification())

        assert result.member == an
        assert result.week == finalized_week
        assert result.amount == Decimal('130000.00')
        payment = Payment.objects.get(member=an, week=finalized_week)
        assert payment.paid is True
        assert payment.paid_at is not None

    def test_amount_within_tolerance(self, gateway_config, notification, finalized_week, an):
        PaymentReconciler(gateway_config).reconcile(notification(amount=13010000))

        assert Payment.objects.get(member=an, week=finalized_week).paid is True

    def test_name_matched_case_insensitively(self, gateway_config, notification, finalized_week, an):
        result = PaymentReconciler(gateway_config).reconcile(
            notification(memo='NGUYEN VAN A TIEN COM 12/01/2026')
        )

        assert result.member == an

    def test_url_encoded_memo(self, gateway_config, notification, finalized_week, an):
        result = PaymentReconciler(gateway_config).reconcile(
            notification(memo='Nguyen%20Van%20A%20tien%20com%2012%2F01%2F2026')
        )

        assert result.member == an

    def test_plus_sign_in_memo_kept_literal(self, gateway_config, notification, finalized_week, an):
        """The memo arrives decoded already, so a '+' is part of the name."""
        an.name = 'An+Binh'
        an.save()

        result = PaymentReconciler(gateway_config).reconcile(
            notification(memo='An+Binh tien com 12/01/2026')
        )

        assert result.member == an

    def test_diacritic_name_matched_case_insensitively(self, gateway_config, notification, finalized_week, an):
        an.name = 'Đức'
        an.save()

        result = PaymentReconciler(gateway_config).reconcile(
            notification(memo='ĐỨC tien com 12/01/2026')
        )

        assert result.member == an
        assert Payment.objects.get(member=an, week=finalized_week).paid is True

    def test_redelivery_keeps_one_row(self, gateway_config, notification, finalized_week, an):
        reconciler = PaymentReconciler(gateway_config)
        fields = notification()

        reconciler.reconcile(fields)
        reconciler.reconcile(fields)

        assert Payment.objects.filter(member=an, week=finalized_week).count() == 1

    def test_overrides_manual_unpaid(self, gateway_config, notification, finalized_week, an):
        Payment.upsert(member=an, week=finalized_week, paid=False)

        PaymentReconciler(gateway_config).reconcile(notification())

        assert Payment.objects.get(member=an, week=finalized_week).paid is True

    def test_verification_disabled(self, gateway_config, notification, finalized_week, an):
        config = replace(gateway_config, hash_secret='', verify_signature=False)

        result = PaymentReconciler(config).reconcile(notification(sign=False))

        assert result.member == an


@pytest.mark.django_db
class TestReconcileRejections:
    """Notifications that are rejected without touching the ledger."""

    def _assert_rejected(self, config, fields, error):
        with pytest.raises(error):
            PaymentReconciler(config).reconcile(fields)
        assert Payment.objects.count() == 0

    def test_amount_mismatch(self, gateway_config, notification, finalized_week):
        with pytest.raises(AmountMismatchError) as exc:
            PaymentReconciler(gateway_config).reconcile(notification(amount=5000000))

        assert exc.value.expected == Decimal('130000.00')
        assert exc.value.received == Decimal('50000.00')
        assert Payment.objects.count() == 0

    def test_just_outside_tolerance(self, gateway_config, notification, finalized_week):
        self._assert_rejected(gateway_config, notification(amount=13010001), AmountMismatchError)

    def test_invalid_signature(self, gateway_config, notification, finalized_week):
        fields = notification()
        fields['vnp_Amount'] = '3000000'

        self._assert_rejected(gateway_config, fields, InvalidSignatureError)

    def test_unsigned(self, gateway_config, notification, finalized_week):
        self._assert_rejected(gateway_config, notification(sign=False), InvalidSignatureError)

    def test_missing_secret(self, gateway_config, notification, finalized_week):
        config = replace(gateway_config, hash_secret='')

        self._assert_rejected(config, notification(), GatewayConfigurationError)

    @pytest.mark.parametrize('overrides', [
        {'vnp_ResponseCode': '24'},
        {'vnp_TransactionStatus': '02'},
    ])
    def test_failed_transaction(self, gateway_config, notification, finalized_week, overrides):
        self._assert_rejected(gateway_config, notification(**overrides), TransactionFailedError)

    def test_missing_amount(self, gateway_config, notification, finalized_week):
        self._assert_rejected(gateway_config, notification(amount=''), InvalidNotificationError)

    def test_bad_memo(self, gateway_config, notification, finalized_week):
        self._assert_rejected(gateway_config, notification(memo='chuyen khoan'), MemoFormatError)

    def test_bad_memo_date(self, gateway_config, notification, finalized_week):
        self._assert_rejected(
            gateway_config, notification(memo='Nguyen Van A tien com 31/02/2026'), MemoDateError
        )

    def test_unknown_payer(self, gateway_config, notification, finalized_week):
        self._assert_rejected(
            gateway_config, notification(memo='Le Van C tien com 12/01/2026'), PayerNotFoundError
        )

    def test_week_not_finalized(self, gateway_config, notification, open_week):
        self._assert_rejected(
            gateway_config,
            notification(memo='Nguyen Van A tien com 19/01/2026', amount=5000000),
            PaymentWeekNotFoundError,
        )

    def test_unknown_week(self, gateway_config, notification, finalized_week):
        self._assert_rejected(
            gateway_config, notification(memo='Nguyen Van A tien com 05/01/2026'), PaymentWeekNotFoundError
        )

    def test_payer_without_charges(self, gateway_config, notification, finalized_week):
        Member.objects.create(name='Chi')

        self._assert_rejected(
            gateway_config, notification(memo='Chi tien com 12/01/2026'), NoChargesError
        )
