from django.contrib import admin
from .models import Employee


@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    """Admin configuration for Employee model"""
    list_display = ['employee_code', 'first_name', 'last_name', 'company', 'department', 'status', 'join_date']
    list_filter = ['status', 'employment_type', 'company']
    search_fields = ['employee_code', 'first_name', 'last_name', 'user__email']
    readonly_fields = ['created_at', 'updated_at', 'created_by', 'updated_by']
    raw_id_fields = ['user']
