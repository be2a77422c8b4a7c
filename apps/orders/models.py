from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
import uuid


class Order(models.Model):
    """One restaurant bill, split across the members who ate from it."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    week = models.ForeignKey(
        'weeks.Week',
        on_delete=models.PROTECT,
        related_name='orders'
    )
    description = models.CharField(max_length=500)

    # Financial details
    total_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        help_text='Sum of undiscounted line prices'
    )
    discount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00')
    )
    final_amount = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.01'))],
        help_text='Negotiated payable total'
    )

    order_date = models.DateTimeField(default=timezone.now)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        indexes = [
            models.Index(fields=['week', 'order_date'], name='orders_week_date_idx'),
        ]
        ordering = ['-order_date', '-created_at']

    def __str__(self):
        return f"{self.description} - {self.final_amount}"


class OrderItem(models.Model):
    """One member's share of one dish within an order."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.PROTECT,
        related_name='order_items'
    )
    line_number = models.PositiveIntegerField(default=0)

    item_name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=14, decimal_places=2)
    discount_share = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        default=Decimal('0.00')
    )
    final_price = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        db_table = 'order_items'
        indexes = [
            models.Index(fields=['member'], name='order_items_member_idx'),
        ]
        ordering = ['order', 'line_number']

    def __str__(self):
        return f"{self.member.name}: {self.item_name} ({self.final_price})"
