from django.contrib import admin
from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    """Admin configuration for Company model"""
    list_display = ['name', 'code', 'status', 'max_employees', 'plan_expires_at', 'created_at']
    list_filter = ['status']
    search_fields = ['name', 'code', 'city', 'country']
    readonly_fields = ['created_at', 'updated_at']
