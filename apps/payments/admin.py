from django.contrib import admin
from django.utils.html import format_html
from .models import Payment


@admin.register(Payment)
class PaymentAdmin(admin.ModelAdmin):
    list_display = ['member', 'week', 'paid_badge', 'paid_at', 'updated_at']
    list_filter = ['paid', 'week']
    search_fields = ['member__name']
    readonly_fields = ['paid_at', 'created_at', 'updated_at']
    actions = ['mark_paid', 'mark_unpaid']

    def paid_badge(self, obj):
        if obj.paid:
            return format_html('<span style="color: green;">✓ Paid</span>')
        return format_html('<span style="color: red;">✗ Unpaid</span>')
    paid_badge.short_description = 'Status'

    @admin.action(description='Mark selected payments as paid')
    def mark_paid(self, request, queryset):
        for payment in queryset:
            Payment.upsert(member=payment.member, week=payment.week, paid=True)

    @admin.action(description='Mark selected payments as unpaid')
    def mark_unpaid(self, request, queryset):
        queryset.update(paid=False, paid_at=None)
