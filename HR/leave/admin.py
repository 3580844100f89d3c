from django.contrib import admin
from .models import LeaveRequest, LeaveType


@admin.register(LeaveType)
class LeaveTypeAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'company', 'is_active']
    list_filter = ['is_active', 'company']
    search_fields = ['name', 'code']


@admin.register(LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ['employee', 'leave_type', 'start_date', 'end_date', 'total_days', 'status', 'reviewed_by']
    list_filter = ['status', 'company']
    search_fields = ['employee__employee_code', 'employee__first_name', 'employee__last_name']
    readonly_fields = ['reviewed_at', 'created_at', 'updated_at']
