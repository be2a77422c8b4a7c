from rest_framework import serializers
from apps.weeks.serializers import WeekSerializer


# =============================================================================
# Input Serializers
# =============================================================================

class PaymentLinkQuerySerializer(serializers.Serializer):
    """
    Query Parameters:
        member (UUID): Payer
        week (UUID): Finalized week being paid for
    """

    member = serializers.UUIDField()
    week = serializers.UUIDField()


class OutstandingQuerySerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100, required=False, allow_blank=True, default='')


# =============================================================================
# Output Serializers
# =============================================================================

class PaymentLinkSerializer(serializers.Serializer):
    payment_url = serializers.URLField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    memo = serializers.CharField()
    txn_ref = serializers.CharField()


class ReconciliationResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField()
    message = serializers.CharField()
    member_id = serializers.UUIDField()
    week_id = serializers.UUIDField()
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)


class PaymentReturnSerializer(serializers.Serializer):
    """What the payer sees after the gateway redirects back."""

    is_success = serializers.BooleanField()
    signature_valid = serializers.BooleanField(allow_null=True)
    member_name = serializers.CharField(allow_blank=True)
    week_date = serializers.CharField(allow_blank=True)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    transaction_no = serializers.CharField(allow_null=True)
    txn_ref = serializers.CharField(allow_null=True)
    response_code = serializers.CharField(allow_null=True)
    transaction_status = serializers.CharField(allow_null=True)


class OutstandingWeekSerializer(serializers.Serializer):
    week = WeekSerializer()
    member_id = serializers.UUIDField(source='member.id')
    member_name = serializers.CharField(source='member.name')
    amount = serializers.DecimalField(max_digits=14, decimal_places=2)
