from datetime import datetime, timedelta

from django.db import models

from core.base.managers import ActiveManager
from core.base.models import CatalogEntryMixin


class WorkShift(CatalogEntryMixin, models.Model):
    """
    Daily working window of an employee.

    end_time earlier than start_time means the shift runs past midnight.
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='work_shifts'
    )
    start_time = models.TimeField()
    end_time = models.TimeField()

    objects = ActiveManager()

    class Meta:
        db_table = 'hr_work_shift'
        verbose_name = 'Work Shift'
        verbose_name_plural = 'Work Shifts'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='uniq_work_shift_company_name'),
            models.UniqueConstraint(fields=['company', 'code'], name='uniq_work_shift_company_code'),
        ]

    @property
    def is_overnight(self):
        return self.end_time < self.start_time

    @property
    def duration_minutes(self):
        start = datetime.combine(datetime.min, self.start_time)
        end = datetime.combine(datetime.min, self.end_time)
        if end <= start:
            end += timedelta(days=1)
        return int((end - start).total_seconds() // 60)
