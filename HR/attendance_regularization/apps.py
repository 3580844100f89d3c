from django.apps import AppConfig


class AttendanceRegularizationConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'HR.attendance_regularization'
    label = 'regularization'
    verbose_name = 'Attendance Regularization'
