from django.contrib import admin
from .models import AttendanceDay, AttendanceLog


class AttendanceLogInline(admin.TabularInline):
    model = AttendanceLog
    extra = 0
    readonly_fields = ['timestamp', 'type', 'method', 'ip_address', 'user_agent', 'created_at']
    can_delete = False


@admin.register(AttendanceDay)
class AttendanceDayAdmin(admin.ModelAdmin):
    list_display = ['employee', 'date', 'status', 'check_in_time', 'check_out_time', 'total_work_minutes', 'source']
    list_filter = ['status', 'source', 'company']
    search_fields = ['employee__employee_code', 'employee__first_name', 'employee__last_name']
    date_hierarchy = 'date'
    readonly_fields = ['created_at', 'updated_at', 'created_by', 'updated_by']
    inlines = [AttendanceLogInline]
