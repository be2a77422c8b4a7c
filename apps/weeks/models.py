from datetime import timedelta

from django.db import models
from django.utils import timezone
import uuid

# A week runs Monday to Friday
WEEK_LENGTH_DAYS = 5


class Week(models.Model):
    """Five-day accounting period that groups orders for settlement."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200, blank=True, null=True)
    start_date = models.DateField(unique=True)
    end_date = models.DateField()

    # Finalization (one-way)
    is_finalized = models.BooleanField(default=False)
    finalized_at = models.DateTimeField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'weeks'
        indexes = [
            models.Index(fields=['is_finalized', 'start_date'], name='weeks_finalized_start_idx'),
        ]
        ordering = ['-start_date']

    def __str__(self):
        label = f"{self.start_date:%d/%m/%Y} - {self.end_date:%d/%m/%Y}"
        return f"{self.name} ({label})" if self.name else label

    @staticmethod
    def end_date_for(start_date):
        return start_date + timedelta(days=WEEK_LENGTH_DAYS - 1)

    def finalize(self):
        """Mark the week as finalized. Already-finalized weeks are left as is."""
        if self.is_finalized:
            return
        self.is_finalized = True
        self.finalized_at = timezone.now()
        self.save(update_fields=['is_finalized', 'finalized_at', 'updated_at'])
