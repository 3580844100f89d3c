from django.apps import AppConfig


class NoticesConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.notices'
    label = 'notices'
    verbose_name = 'Notices'
