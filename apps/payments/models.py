from django.db import models
from django.utils import timezone
import uuid


class Payment(models.Model):
    """Settlement state of one member's total for one week."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    member = models.ForeignKey(
        'members.Member',
        on_delete=models.CASCADE,
        related_name='payments'
    )
    week = models.ForeignKey(
        'weeks.Week',
        on_delete=models.CASCADE,
        related_name='payments'
    )

    paid = models.BooleanField(default=False)
    paid_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'payments'
        constraints = [
            models.UniqueConstraint(fields=['member', 'week'], name='unique_payment_member_week'),
        ]
        indexes = [
            models.Index(fields=['week', 'paid'], name='payments_week_paid_idx'),
        ]
        ordering = ['created_at']

    def __str__(self):
        state = 'paid' if self.paid else 'unpaid'
        return f"{self.member.name} - {self.week} ({state})"

    @classmethod
    def upsert(cls, *, member, week, paid):
        """Create or update the payment row for (member, week)."""
        payment, _ = cls.objects.update_or_create(
            member=member,
            week=week,
            defaults={
                'paid': paid,
                'paid_at': timezone.now() if paid else None,
            },
        )
        return payment
