# ==========================================
# apps/members/admin.py
# ==========================================

from django.contrib import admin
from django.db.models import Count
from .models import Member


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    """Admin interface for lunch members."""

    list_display = ['name', 'email', 'get_order_count', 'created_at']
    search_fields = ['name', 'email']
    ordering = ['name']
    readonly_fields = ['created_at', 'updated_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.annotate(order_count=Count('order_items'))

    def get_order_count(self, obj):
        return obj.order_count
    get_order_count.short_description = 'Order lines'
    get_order_count.admin_order_field = 'order_count'

    def has_delete_permission(self, request, obj=None):
        """Members with order lines cannot be deleted."""
        if obj is not None and obj.order_items.exists():
            return False
        return super().has_delete_permission(request, obj)
