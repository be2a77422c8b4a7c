from django.db import models
import uuid


class Member(models.Model):
    """A coworker who orders lunch and pays their share."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    # Payment memos are matched on this, so it folds full Unicode case
    name_normalized = models.CharField(max_length=100, unique=True, editable=False)
    email = models.EmailField(max_length=255, blank=True, null=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'members'
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        self.name_normalized = self.normalize_name(self.name)
        super().save(*args, **kwargs)

    @staticmethod
    def normalize_name(name):
        """
        Example:
            >>> Member.normalize_name('  ĐỨC  Anh ')
            'đức anh'
        """
        return ' '.join((name or '').split()).casefold()
