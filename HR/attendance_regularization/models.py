"""
Attendance Regularization Models

An employee asks for a past attendance day to be corrected (missed
check-in or check-out, wrong times). A company-level reviewer approves the
request, which rewrites the attendance day, or rejects it.
"""
from django.conf import settings
from django.db import models

from core.base.managers import BaseQuerySet
from core.base.models import AuditMixin


class RegularizationType(models.TextChoices):
    MISSED_CHECKIN = 'MISSED_CHECKIN', 'Missed Check-in'
    MISSED_CHECKOUT = 'MISSED_CHECKOUT', 'Missed Check-out'
    WRONG_TIME = 'WRONG_TIME', 'Wrong Time'
    FULL_DAY_EDIT = 'FULL_DAY_EDIT', 'Full Day Edit'


class RegularizationStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    CANCELLED = 'CANCELLED', 'Cancelled'


# Request types that must carry a requested check-in / check-out time
NEEDS_CHECK_IN = (
    RegularizationType.MISSED_CHECKIN,
    RegularizationType.WRONG_TIME,
    RegularizationType.FULL_DAY_EDIT,
)
NEEDS_CHECK_OUT = (
    RegularizationType.MISSED_CHECKOUT,
    RegularizationType.WRONG_TIME,
    RegularizationType.FULL_DAY_EDIT,
)


class AttendanceRegularization(AuditMixin, models.Model):
    """
    Correction request for one employee and date.

    before_snapshot holds the attendance day as it was when the request was
    filed (refreshed on approval); after_snapshot holds it once the approved
    times were applied.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='attendance_regularizations'
    )
    employee = models.ForeignKey(
        'person.Employee',
        on_delete=models.CASCADE,
        related_name='attendance_regularizations'
    )
    attendance_day = models.ForeignKey(
        'attendance.AttendanceDay',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='regularizations'
    )
    date = models.DateField()
    request_type = models.CharField(max_length=20, choices=RegularizationType.choices)
    requested_check_in_time = models.TimeField(null=True, blank=True)
    requested_check_out_time = models.TimeField(null=True, blank=True)
    reason = models.TextField()
    status = models.CharField(
        max_length=20,
        choices=RegularizationStatus.choices,
        default=RegularizationStatus.PENDING,
        db_index=True
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_regularizations'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    review_note = models.TextField(blank=True, default='')
    before_snapshot = models.JSONField(null=True, blank=True)
    after_snapshot = models.JSONField(null=True, blank=True)

    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'hr_attendance_regularization'
        verbose_name = 'Attendance Regularization'
        verbose_name_plural = 'Attendance Regularizations'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='idx_regularization_company'),
            models.Index(fields=['employee', 'date'], name='idx_regularization_employee'),
        ]

    def __str__(self):
        return f"{self.employee_id} {self.date} {self.request_type} {self.status}"
