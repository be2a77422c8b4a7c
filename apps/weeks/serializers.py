from rest_framework import serializers
from .models import Week


# =============================================================================
# Input Serializers
# =============================================================================

class WeekCreateSerializer(serializers.Serializer):
    """Start date (a Monday) and optional name."""

    start_date = serializers.DateField()
    name = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)


class PaymentStatusInputSerializer(serializers.Serializer):
    """Manual paid/unpaid override for one member."""

    member = serializers.UUIDField()
    paid = serializers.BooleanField()


class DashboardFilterSerializer(serializers.Serializer):
    week = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class WeekSerializer(serializers.ModelSerializer):
    """Week with inclusive date range."""

    label = serializers.CharField(source='__str__', read_only=True)

    class Meta:
        model = Week
        fields = [
            'id',
            'name',
            'label',
            'start_date',
            'end_date',
            'is_finalized',
            'finalized_at',
            'created_at',
        ]
        read_only_fields = fields


class WeekListSerializer(WeekSerializer):
    order_count = serializers.IntegerField(read_only=True)

    class Meta(WeekSerializer.Meta):
        fields = WeekSerializer.Meta.fields + ['order_count']
        read_only_fields = fields


class MemberLedgerEntrySerializer(serializers.Serializer):
    member_id = serializers.UUIDField()
    member_name = serializers.CharField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    paid = serializers.BooleanField()
    paid_at = serializers.DateTimeField(allow_null=True)


class WeekLedgerSerializer(serializers.Serializer):
    """Per-member totals and payment state for one week."""

    week = WeekSerializer()
    members = MemberLedgerEntrySerializer(many=True)
    total_orders_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    all_paid = serializers.BooleanField()
    has_members = serializers.BooleanField()


class PaymentStatusSerializer(serializers.Serializer):
    member = serializers.UUIDField(source='member_id')
    week = serializers.UUIDField(source='week_id')
    paid = serializers.BooleanField()
    paid_at = serializers.DateTimeField(allow_null=True)
