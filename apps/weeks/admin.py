from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html
from .models import Week


@admin.register(Week)
class WeekAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'start_date', 'end_date', 'finalized_badge', 'get_order_count']
    list_filter = ['is_finalized']
    search_fields = ['name']
    ordering = ['-start_date']
    readonly_fields = ['end_date', 'is_finalized', 'finalized_at', 'created_at', 'updated_at']
    actions = ['finalize_selected']

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(order_count=Count('orders'))

    def get_order_count(self, obj):
        return obj.order_count
    get_order_count.short_description = 'Orders'
    get_order_count.admin_order_field = 'order_count'

    def finalized_badge(self, obj):
        if obj.is_finalized:
            return format_html('<span style="color: green;">✓ Finalized</span>')
        return format_html('<span style="color: orange;">Open</span>')
    finalized_badge.short_description = 'Status'

    @admin.action(description='Finalize selected weeks')
    def finalize_selected(self, request, queryset):
        count = 0
        for week in queryset.filter(is_finalized=False):
            week.finalize()
            count += 1
        self.message_user(request, f'{count} week(s) finalized.')
