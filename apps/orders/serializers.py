from decimal import Decimal

from rest_framework import serializers
from apps.members.serializers import MemberMinimalSerializer
from .models import Order, OrderItem


# =============================================================================
# Input Serializers
# =============================================================================

class DishInputSerializer(serializers.Serializer):
    """One dish on the bill and who ordered it."""

    item_name = serializers.CharField(max_length=200)
    price = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal('0.01')
    )
    member_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=True
    )


class OrderInputSerializer(serializers.Serializer):
    """
    Create or replace an order.

    Example:
        {
            "week": "…uuid…",
            "description": "Quan Pho 24",
            "final_amount": "120000",
            "items": [
                {"item_name": "Pho", "price": "50000", "member_ids": ["…", "…"]}
            ]
        }
    """

    week = serializers.UUIDField()
    description = serializers.CharField(max_length=500)
    final_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    order_date = serializers.DateTimeField(required=False)
    items = DishInputSerializer(many=True, allow_empty=False)


class OrderFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for order listing.

    Query Parameters:
        week (UUID): Only orders of this week
    """

    week = serializers.UUIDField(required=False)


# =============================================================================
# Output Serializers
# =============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    """Order line with member info."""

    member = MemberMinimalSerializer(read_only=True)

    class Meta:
        model = OrderItem
        fields = [
            'id',
            'line_number',
            'member',
            'item_name',
            'price',
            'discount_share',
            'final_price',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Full order with its lines."""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'week',
            'description',
            'total_amount',
            'discount',
            'final_amount',
            'order_date',
            'items',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    """Lightweight order for list views."""

    item_count = serializers.IntegerField(source='items.count', read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'week',
            'description',
            'total_amount',
            'discount',
            'final_amount',
            'order_date',
            'item_count',
        ]
        read_only_fields = fields


class DishMemberSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    name = serializers.CharField()


class DishSerializer(serializers.Serializer):
    """Dish regrouped from order lines."""

    item_name = serializers.CharField()
    price = serializers.DecimalField(max_digits=14, decimal_places=2)
    members = DishMemberSerializer(many=True)
