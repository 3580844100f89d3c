"""
Notice Models

- Notice: a company announcement, either company-wide or targeted
- NoticeAudience: one targeting rule (department, designation, employee,
  role or work shift)
- NoticeRead: an employee's read receipt
"""
from django.db import models

from core.base.managers import BaseQuerySet
from core.base.models import AuditMixin


class NoticeStatus(models.TextChoices):
    DRAFT = 'DRAFT', 'Draft'
    PUBLISHED = 'PUBLISHED', 'Published'
    ARCHIVED = 'ARCHIVED', 'Archived'


class NoticePriority(models.TextChoices):
    LOW = 'LOW', 'Low'
    NORMAL = 'NORMAL', 'Normal'
    HIGH = 'HIGH', 'High'


class AudienceType(models.TextChoices):
    DEPARTMENT = 'DEPARTMENT', 'Department'
    DESIGNATION = 'DESIGNATION', 'Designation'
    EMPLOYEE = 'EMPLOYEE', 'Employee'
    ROLE = 'ROLE', 'Role'
    WORK_SHIFT = 'WORK_SHIFT', 'Work Shift'


class Notice(AuditMixin, models.Model):
    """
    Employees see a notice while it is PUBLISHED, publish_at (if any) has
    passed and expires_at (if any) has not.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='notices'
    )
    title = models.CharField(max_length=200)
    body = models.TextField()
    priority = models.CharField(max_length=10, choices=NoticePriority.choices, default=NoticePriority.NORMAL)
    status = models.CharField(
        max_length=10,
        choices=NoticeStatus.choices,
        default=NoticeStatus.DRAFT,
        db_index=True
    )
    publish_at = models.DateTimeField(null=True, blank=True)
    expires_at = models.DateTimeField(null=True, blank=True)
    is_company_wide = models.BooleanField(default=True)

    objects = BaseQuerySet.as_manager()

    class Meta:
        db_table = 'hr_notice'
        verbose_name = 'Notice'
        verbose_name_plural = 'Notices'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['company', 'status'], name='idx_notice_company_status'),
        ]

    def __str__(self):
        return self.title


class NoticeAudience(models.Model):
    """Exactly one target column is set, matching audience_type."""
    notice = models.ForeignKey(Notice, on_delete=models.CASCADE, related_name='audiences')
    audience_type = models.CharField(max_length=20, choices=AudienceType.choices)
    department = models.ForeignKey(
        'work_structures.Department',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notice_audiences'
    )
    designation = models.ForeignKey(
        'work_structures.Designation',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notice_audiences'
    )
    employee = models.ForeignKey(
        'person.Employee',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notice_audiences'
    )
    work_shift = models.ForeignKey(
        'work_structures.WorkShift',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='notice_audiences'
    )
    role = models.CharField(max_length=20, blank=True, default='')

    class Meta:
        db_table = 'hr_notice_audience'

    def __str__(self):
        return f"{self.notice_id} {self.audience_type}"


class NoticeRead(models.Model):
    notice = models.ForeignKey(Notice, on_delete=models.CASCADE, related_name='reads')
    employee = models.ForeignKey('person.Employee', on_delete=models.CASCADE, related_name='notice_reads')
    read_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'hr_notice_read'
        ordering = ['-read_at']
        constraints = [
            models.UniqueConstraint(fields=['notice', 'employee'], name='uniq_notice_read_employee'),
        ]

    def __str__(self):
        return f"{self.employee_id} read {self.notice_id}"
