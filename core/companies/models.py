"""
Company (tenant) model.

Every tenant-scoped row in the system carries a company foreign key; users of a
suspended or archived company cannot sign in or create dependent records.
"""
from django.db import models

from core.base.managers import BaseManager


class CompanyStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    SUSPENDED = 'suspended', 'Suspended'
    ARCHIVED = 'archived', 'Archived'


class Company(models.Model):
    name = models.CharField(max_length=150, unique=True)
    code = models.CharField(max_length=50, unique=True, null=True, blank=True)
    logo_url = models.CharField(max_length=500, blank=True, default='')
    industry = models.CharField(max_length=100, blank=True, default='')
    address = models.CharField(max_length=255, blank=True, default='')
    city = models.CharField(max_length=100, blank=True, default='')
    country = models.CharField(max_length=100, blank=True, default='')
    plan_expires_at = models.DateField(null=True, blank=True)
    max_employees = models.PositiveIntegerField(
        null=True,
        blank=True,
        help_text="Maximum number of active employees; empty means unlimited"
    )
    status = models.CharField(
        max_length=20,
        choices=CompanyStatus.choices,
        default=CompanyStatus.ACTIVE,
        db_index=True
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = BaseManager()

    class Meta:
        db_table = 'companies'
        verbose_name = 'Company'
        verbose_name_plural = 'Companies'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    @property
    def is_active(self):
        return self.status == CompanyStatus.ACTIVE
