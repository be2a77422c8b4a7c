from rest_framework import serializers
from .models import Member


# =============================================================================
# Input Serializers
# =============================================================================

class MemberInputSerializer(serializers.Serializer):
    """Name and optional email for creating or updating a member."""

    name = serializers.CharField(max_length=100)
    email = serializers.EmailField(max_length=255, required=False, allow_blank=True, allow_null=True)


class MemberBulkCreateSerializer(serializers.Serializer):
    """Create several members at once."""

    members = MemberInputSerializer(many=True, allow_empty=False)


class MemberLookupSerializer(serializers.Serializer):
    """Find a member by name, creating one if missing."""

    name = serializers.CharField(max_length=100)


class MemberFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for member listing.

    Query Parameters:
        ordering (str): order_count, total_amount or name, '-' for descending
    """

    ordering = serializers.ChoiceField(
        choices=[
            'order_count', '-order_count',
            'total_amount', '-total_amount',
            'name', '-name',
        ],
        required=False,
        default='-order_count',
    )


# =============================================================================
# Output Serializers
# =============================================================================

class MemberSerializer(serializers.ModelSerializer):
    """Basic member representation."""

    class Meta:
        model = Member
        fields = ['id', 'name', 'email', 'created_at', 'updated_at']
        read_only_fields = fields


class MemberMinimalSerializer(serializers.ModelSerializer):
    """Minimal member info for nested serialization."""

    class Meta:
        model = Member
        fields = ['id', 'name']
        read_only_fields = fields


class MemberStatsSerializer(serializers.ModelSerializer):
    """Member with lifetime line count and charged total."""

    order_count = serializers.IntegerField(read_only=True)
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Member
        fields = ['id', 'name', 'email', 'order_count', 'total_amount', 'created_at']
        read_only_fields = fields
