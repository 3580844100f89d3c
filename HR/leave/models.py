"""
Leave Models

- LeaveType: company catalog of leave kinds (Annual, Sick...)
- LeaveRequest: an employee's request for a date range, reviewed by a
  company-level user
"""
from django.conf import settings
from django.db import models

from core.base.managers import ActiveManager, BaseQuerySet
from core.base.models import AuditMixin, CatalogEntryMixin


class LeaveType(CatalogEntryMixin, models.Model):
    """
    Mixins:
    - CatalogEntryMixin: name, code, description, is_active, audit fields
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='leave_types'
    )

    objects = ActiveManager()

    class Meta:
        db_table = 'hr_leave_type'
        verbose_name = 'Leave Type'
        verbose_name_plural = 'Leave Types'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='uniq_leave_type_company_name'),
            models.UniqueConstraint(fields=['company', 'code'], name='uniq_leave_type_company_code'),
        ]


class LeaveRequestStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    APPROVED = 'APPROVED', 'Approved'
    REJECTED = 'REJECTED', 'Rejected'
    CANCELLED = 'CANCELLED', 'Cancelled'


# Requests in these states block overlapping requests of the same employee
OPEN_STATUSES = (LeaveRequestStatus.PENDING, LeaveRequestStatus.APPROVED)


class LeaveRequest(AuditMixin, models.Model):
    """
    Leave for an inclusive date range.

    total_days counts the dates in the range that are not weekly off days.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='leave_requests'
    )
    employee = models.ForeignKey(
        'person.Employee',
        on_delete=models.CASCADE,
        related_name='leave_requests'
    )
    leave_type = models.ForeignKey(
        LeaveType,
        on_delete=models.PROTECT,
        related_name='requests'
    )
    start_date = models.DateField()
    end_date = models.DateField()
    total_days = models.PositiveIntegerField(default=0)
    reason = models.TextField()
    status = models.CharField(
        max_length=20,
        choices=LeaveRequestStatus.choices,
        default=LeaveRequestStatus.PENDING,
        db_index=True
    )
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_leave_requests'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    review_note = models.TextField(blank=True, default='')

    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'hr_leave_request'
        verbose_name = 'Leave Request'
        verbose_name_plural = 'Leave Requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='idx_leave_company_status'),
            models.Index(fields=['employee', 'start_date'], name='idx_leave_employee_start'),
        ]

    def __str__(self):
        return f"{self.employee_id} {self.start_date}..{self.end_date} {self.status}"
