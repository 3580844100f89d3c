from django.contrib import admin
from .models import Notice, NoticeAudience, NoticeRead


class NoticeAudienceInline(admin.TabularInline):
    model = NoticeAudience
    extra = 0


@admin.register(Notice)
class NoticeAdmin(admin.ModelAdmin):
    list_display = ['title', 'company', 'priority', 'status', 'publish_at', 'expires_at', 'is_company_wide']
    list_filter = ['status', 'priority', 'is_company_wide', 'company']
    search_fields = ['title', 'body']
    inlines = [NoticeAudienceInline]


@admin.register(NoticeRead)
class NoticeReadAdmin(admin.ModelAdmin):
    list_display = ['notice', 'employee', 'read_at']
    readonly_fields = ['read_at']
