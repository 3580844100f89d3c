from django.contrib import admin
from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(admin.ModelAdmin):
    """Admin configuration for CustomUser model"""
    list_display = ['email', 'name', 'role', 'company', 'is_active', 'last_login']
    list_filter = ['role', 'is_active', 'company']
    search_fields = ['email', 'name', 'phone_number']
    readonly_fields = ['last_login', 'created_at', 'updated_at']

    fieldsets = (
        ('User Information', {
            'fields': ('email', 'name', 'phone_number')
        }),
        ('Role & Tenant', {
            'fields': ('role', 'company', 'is_active')
        }),
        ('Authentication', {
            'fields': ('password', 'last_login', 'created_at', 'updated_at')
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        """Company of an existing user cannot change"""
        readonly = list(self.readonly_fields)
        if obj is not None:
            readonly.append('company')
        return readonly
