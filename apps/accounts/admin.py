from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Administrator accounts. There is no self-service sign-up."""

    list_display = ['username', 'display_name', 'is_active', 'is_superuser', 'last_login']
    list_filter = ['is_active', 'is_superuser']
    search_fields = ['username', 'display_name']
    ordering = ['username']

    fieldsets = (
        (None, {'fields': ('username', 'display_name', 'password')}),
        ('Permissions', {'fields': ('is_active', 'is_staff', 'is_superuser')}),
        ('Activity', {'fields': ('created_at', 'last_login')}),
    )

    add_fieldsets = (
        ('Create Administrator', {
            'classes': ('wide',),
            'fields': ('username', 'display_name', 'password1', 'password2'),
        }),
    )

    readonly_fields = ['created_at', 'last_login']
    filter_horizontal = []
