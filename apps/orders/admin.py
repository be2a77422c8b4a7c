from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ['line_number', 'member', 'item_name', 'price', 'discount_share', 'final_price']
    readonly_fields = fields
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Orders are edited through the API so lines stay consistent."""

    list_display = ['description', 'week', 'total_amount', 'discount', 'final_amount', 'order_date']
    list_filter = ['week', 'order_date']
    search_fields = ['description', 'items__item_name', 'items__member__name']
    date_hierarchy = 'order_date'
    readonly_fields = ['total_amount', 'discount', 'final_amount', 'created_at', 'updated_at']
    inlines = [OrderItemInline]


@admin.register(OrderItem)
class OrderItemAdmin(admin.ModelAdmin):
    list_display = ['member', 'item_name', 'price', 'discount_share', 'final_price', 'order']
    list_filter = ['order__week']
    search_fields = ['item_name', 'member__name']
    readonly_fields = ['order', 'member', 'line_number', 'price', 'discount_share', 'final_price']
