from django.db import models

from core.base.managers import ActiveManager
from core.base.models import CatalogEntryMixin


class Department(CatalogEntryMixin, models.Model):
    """
    Organizational unit of a company (Finance, Engineering...).

    Mixins:
    - CatalogEntryMixin: name, code, description, is_active, audit fields
    """
    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='departments'
    )

    objects = ActiveManager()

    class Meta:
        db_table = 'hr_department'
        verbose_name = 'Department'
        verbose_name_plural = 'Departments'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['company', 'name'], name='uniq_department_company_name'),
            models.UniqueConstraint(fields=['company', 'code'], name='uniq_department_company_code'),
        ]
