from django.apps import AppConfig


class WorkStructuresConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.work_structures'
    label = 'work_structures'
    verbose_name = 'Work Structures'
