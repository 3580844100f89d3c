"""
Core Base Managers Module

Provides querysets shared by the tenant-scoped models.

**Architecture:**
- BaseQuerySet: company scoping, free-text search, validated sorting
- ActiveQuerySet: For models with an is_active flag

Usage:
    from core.base.managers import ActiveManager

    class Department(ActiveFlagMixin, AuditMixin, models.Model):
        objects = ActiveManager()

    Department.objects.for_company(company_id).active().search('fin', ['name', 'code'])
"""
from django.db import models
from django.db.models import Q


class BaseQuerySet(models.QuerySet):
    """
    Base QuerySet with common filtering methods.

    Methods:
        - for_company: restrict to one tenant
        - search: case-insensitive contains across several fields
        - apply_sorting: order by a whitelisted field
    """

    def for_company(self, company_id):
        return self.filter(company_id=company_id)

    def search(self, term, fields):
        """
        Case-insensitive contains match of term across fields.

        Args:
            term: Search string; blank returns the queryset unchanged
            fields: Iterable of lookups, e.g. ['name', 'code', 'user__email']
        """
        if not term:
            return self
        condition = Q()
        for field in fields:
            condition |= Q(**{f'{field}__icontains': term})
        return self.filter(condition)

    def apply_sorting(self, sort_by, sort_order, allowed_fields, default='created_at'):
        """
        Order by sort_by when it is one of allowed_fields, else by default.

        sort_order is 'asc' or 'desc' (default 'desc'). A secondary order on
        pk keeps pagination stable.
        """
        field = sort_by if sort_by in allowed_fields else default
        prefix = '' if (sort_order or '').lower() == 'asc' else '-'
        return self.order_by(f'{prefix}{field}', f'{prefix}pk')


class ActiveQuerySet(BaseQuerySet):
    """
    QuerySet for models with an is_active flag.

    Methods:
        - active(): Return is_active=True records
        - inactive(): Return is_active=False records
        - filter_active_param(): apply an optional ?is_active= query value
    """

    def active(self):
        return self.filter(is_active=True)

    def inactive(self):
        return self.filter(is_active=False)

    def filter_active_param(self, value):
        """
        Apply an is_active filter coming from query parameters.

        Accepts booleans or strings ('true'/'false'/'1'/'0'); None or an
        unrecognized string leaves the queryset unchanged.
        """
        if value is None or value == '':
            return self
        if isinstance(value, bool):
            return self.filter(is_active=value)
        lowered = str(value).strip().lower()
        if lowered in ('true', '1', 'yes'):
            return self.active()
        if lowered in ('false', '0', 'no'):
            return self.inactive()
        return self


class ActiveManager(models.Manager.from_queryset(ActiveQuerySet)):
    """
    Manager for ActiveFlagMixin models.

    Usage:
        Department.objects.active()
        Department.objects.inactive()
    """
    pass


class BaseManager(models.Manager.from_queryset(BaseQuerySet)):
    """Manager exposing BaseQuerySet helpers for models without an is_active flag."""
    pass
