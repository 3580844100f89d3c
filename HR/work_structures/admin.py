from django.contrib import admin
from .models import Department, Designation, WorkShift


class CatalogAdmin(admin.ModelAdmin):
    list_display = ['name', 'code', 'company', 'is_active', 'created_at']
    list_filter = ['is_active', 'company']
    search_fields = ['name', 'code']
    readonly_fields = ['created_at', 'updated_at', 'created_by', 'updated_by']


admin.site.register(Department, CatalogAdmin)
admin.site.register(Designation, CatalogAdmin)


@admin.register(WorkShift)
class WorkShiftAdmin(CatalogAdmin):
    list_display = ['name', 'code', 'company', 'start_time', 'end_time', 'is_active']
