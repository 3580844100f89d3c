"""
Shared service for company-owned catalogs (departments, designations,
work shifts, leave types).

All of them follow the same rules:
- create only inside an active company
- name unique per company, code unique per company when given
- reads and writes restricted to the caller's company
- delete refused while other records still reference the row

Subclasses set the model and labels and override the hooks they need.
"""
import logging
from dataclasses import asdict

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.http import Http404

from core.base.exceptions import ConflictError
from core.base.tenancy import require_company, require_active_company, ensure_same_company

logger = logging.getLogger(__name__)


class TenantCatalogService:
    model = None
    label = 'record'
    label_plural = 'records'
    pk_field = 'id'
    search_fields = ('name', 'code', 'description')
    sort_fields = ('created_at', 'updated_at', 'name', 'code')
    editable_fields = ('name', 'code', 'description', 'is_active')
    related_lookups = ()

    # Hooks

    @classmethod
    def clean_values(cls, values: dict, instance=None) -> dict:
        """Validate/normalize field values before save. Override as needed."""
        return values

    @classmethod
    def usage_count(cls, instance) -> int:
        """Number of records that block deletion of instance."""
        return 0

    @classmethod
    def usage_message(cls, instance, count) -> str:
        return (
            f'Cannot delete {cls.label}. {count} employee(s) are assigned to this {cls.label}. '
            f'Please reassign or remove them first.'
        )

    # Queries

    @classmethod
    def list(cls, user, filters: dict = None) -> models.QuerySet:
        """
        List rows of the caller's company.

        Args:
            filters: Dictionary of filters
                - is_active: 'true' / 'false'
                - search: name, code or description contains
                - sort_by / sort_order (default created_at desc)
        """
        filters = filters or {}
        company = require_company(user)

        queryset = cls.model.objects.for_company(company.id)
        if cls.related_lookups:
            queryset = queryset.select_related(*cls.related_lookups)

        queryset = queryset.filter_active_param(filters.get('is_active'))
        queryset = queryset.search(filters.get('search'), cls.search_fields)

        return queryset.apply_sorting(
            filters.get('sort_by'),
            filters.get('sort_order'),
            cls.sort_fields
        )

    @classmethod
    def get(cls, user, pk):
        """
        Raises:
            Http404: If no such row
            PermissionDenied: If the row belongs to another company
        """
        try:
            instance = cls.model.objects.get(pk=pk)
        except cls.model.DoesNotExist:
            raise Http404(f'{cls.label.capitalize()} with ID "{pk}" not found')

        ensure_same_company(user, instance, cls.label_plural)
        return instance

    # Commands

    @classmethod
    def _ensure_unique(cls, company_id, name=None, code=None, exclude_pk=None):
        queryset = cls.model.objects.for_company(company_id)
        if exclude_pk is not None:
            queryset = queryset.exclude(pk=exclude_pk)

        if name and queryset.filter(name__iexact=name).exists():
            raise ConflictError(f'{cls.label.capitalize()} with name "{name}" already exists in your company')

        if code and queryset.filter(code__iexact=code).exists():
            raise ConflictError(f'{cls.label.capitalize()} with code "{code}" already exists in your company')

    @classmethod
    @transaction.atomic
    def create(cls, user, dto):
        company = require_active_company(user, cls.label_plural)

        values = {key: value for key, value in asdict(dto).items() if key in cls.editable_fields}
        values['code'] = values.get('code') or None
        values = cls.clean_values(values)

        cls._ensure_unique(company.id, name=values.get('name'), code=values.get('code'))

        instance = cls.model(company=company, created_by=user, updated_by=user, **values)
        instance.full_clean(validate_unique=False, validate_constraints=False)
        instance.save()

        logger.info("%s %s created in %s by %s", cls.label.capitalize(), instance.name, company.name, user.email)
        return instance

    @classmethod
    @transaction.atomic
    def update(cls, user, dto):
        instance = cls.get(user, getattr(dto, cls.pk_field))

        values = {
            key: value for key, value in asdict(dto).items()
            if key in cls.editable_fields and value is not None
        }
        if 'code' in values:
            values['code'] = values['code'] or None
        values = cls.clean_values(values, instance=instance)

        cls._ensure_unique(
            instance.company_id,
            name=values.get('name'),
            code=values.get('code'),
            exclude_pk=instance.pk
        )

        values['updated_by'] = user
        return instance.update_fields(values)

    @classmethod
    @transaction.atomic
    def delete(cls, user, pk):
        """
        Raises:
            ValidationError: While other records still reference the row
        """
        instance = cls.get(user, pk)

        count = cls.usage_count(instance)
        if count:
            raise ValidationError(cls.usage_message(instance, count))

        name = instance.name
        instance.delete()
        logger.info("%s %s deleted by %s", cls.label.capitalize(), name, user.email)
