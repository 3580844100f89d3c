from django.db import models

from core.base.managers import ActiveManager
from core.base.models import CatalogEntryMixin


class Designation(CatalogEntryMixin, models.Model):
    """
    Job title held by employees (Software Engineer, Accountant...).
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='designations'
    )

    objects = ActiveManager()

    class Meta:
        db_table = 'hr_designation'
        verbose_name = 'Designation'
        verbose_name_plural = 'Designations'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='uniq_designation_company_name'),
            models.UniqueConstraint(fields=['company', 'code'], name='uniq_designation_company_code'),
        ]
