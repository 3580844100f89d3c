from django.contrib import admin
from .models import AttendanceRegularization


@admin.register(AttendanceRegularization)
class AttendanceRegularizationAdmin(admin.ModelAdmin):
    list_display = ['employee', 'date', 'request_type', 'status', 'reviewed_by']
    list_filter = ['status', 'request_type', 'company']
    search_fields = ['employee__employee_code', 'employee__first_name', 'employee__last_name']
    readonly_fields = ['before_snapshot', 'after_snapshot', 'reviewed_at', 'created_at', 'updated_at']
