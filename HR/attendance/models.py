"""
Attendance Models

- AttendanceDay: one row per employee and calendar date with computed metrics
- AttendanceLog: raw check-in / check-out events behind a day
"""
from django.db import models

from core.base.managers import BaseQuerySet
from core.base.models import AuditMixin


class AttendanceStatus(models.TextChoices):
    PRESENT = 'PRESENT', 'Present'
    ABSENT = 'ABSENT', 'Absent'
    LATE = 'LATE', 'Late'
    HALF_DAY = 'HALF_DAY', 'Half Day'
    ON_LEAVE = 'ON_LEAVE', 'On Leave'


class AttendanceSource(models.TextChoices):
    SELF = 'SELF', 'Self'
    ADMIN = 'ADMIN', 'Admin'
    IMPORT = 'IMPORT', 'Import'


class LogType(models.TextChoices):
    CHECK_IN = 'CHECK_IN', 'Check In'
    CHECK_OUT = 'CHECK_OUT', 'Check Out'


class LogMethod(models.TextChoices):
    WEB = 'WEB', 'Web'
    ADMIN = 'ADMIN', 'Admin'
    IMPORT = 'IMPORT', 'Import'


class AttendanceDay(AuditMixin, models.Model):
    """
    Attendance of one employee on one date.

    date is the local calendar date (settings.TIME_ZONE) on which the shift
    started; check-in/out times are stored as aware datetimes.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='attendance_days'
    )
    employee = models.ForeignKey(
        'person.Employee',
        on_delete=models.CASCADE,
        related_name='attendance_days'
    )
    work_shift = models.ForeignKey(
        'work_structures.WorkShift',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='attendance_days'
    )
    date = models.DateField()
    check_in_time = models.DateTimeField(null=True, blank=True)
    check_out_time = models.DateTimeField(null=True, blank=True)
    status = models.CharField(
        max_length=20,
        choices=AttendanceStatus.choices,
        default=AttendanceStatus.ABSENT,
        db_index=True
    )
    late_minutes = models.PositiveIntegerField(default=0)
    total_work_minutes = models.PositiveIntegerField(default=0)
    overtime_minutes = models.PositiveIntegerField(default=0)
    source = models.CharField(max_length=10, choices=AttendanceSource.choices, default=AttendanceSource.SELF)
    notes = models.TextField(blank=True, default='')

    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'hr_attendance_day'
        verbose_name = 'Attendance Day'
        verbose_name_plural = 'Attendance Days'
        ordering = ['-date', '-id']
        constraints = [
            models.UniqueConstraint(fields=['employee', 'date'], name='uniq_attendance_employee_date'),
        ]
        indexes = [
            models.Index(fields=['company', 'date'], name='idx_attendance_company_date'),
        ]

    def __str__(self):
        return f"{self.employee_id} {self.date} {self.status}"


class AttendanceLog(models.Model):
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='attendance_logs'
    )
    employee = models.ForeignKey(
        'person.Employee',
        on_delete=models.CASCADE,
        related_name='attendance_logs'
    )
    attendance_day = models.ForeignKey(
        AttendanceDay,
        on_delete=models.CASCADE,
        related_name='logs'
    )
    timestamp = models.DateTimeField()
    type = models.CharField(max_length=10, choices=LogType.choices)
    method = models.CharField(max_length=10, choices=LogMethod.choices)
    ip_address = models.GenericIPAddressField(null=True, blank=True)
    user_agent = models.CharField(max_length=500, blank=True, default='')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'hr_attendance_log'
        ordering = ['timestamp']

    def __str__(self):
        return f"{self.type} {self.employee_id} @ {self.timestamp}"
