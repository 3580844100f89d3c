"""
Core Base Module

Provides shared base classes, mixins, and utilities for all HRM modules.

Exports:
    Individual Feature Mixins:
        - AuditMixin: Adds created_at, updated_at, created_by, updated_by
        - ActiveFlagMixin: Adds is_active + deactivate/update_fields
        - CatalogEntryMixin: name/code/description + both mixins above

    Managers & QuerySets:
        - BaseQuerySet: for_company, search, apply_sorting
        - ActiveQuerySet: BaseQuerySet + active()/inactive()
        - ActiveManager / BaseManager

    Exceptions:
        - ConflictError: 409 for uniqueness violations

Usage Examples:

    from core.base import ActiveFlagMixin, AuditMixin
    from core.base.managers import ActiveManager

    class Designation(ActiveFlagMixin, AuditMixin, models.Model):
        name = models.CharField(max_length=100)
        objects = ActiveManager()
"""

from core.base.models import (
    AuditMixin,
    ActiveFlagMixin,
    CatalogEntryMixin,
)

from core.base.managers import (
    BaseQuerySet,
    BaseManager,
    ActiveQuerySet,
    ActiveManager,
)

from core.base.exceptions import ConflictError

__all__ = [
    # Individual Feature Mixins
    'AuditMixin',
    'ActiveFlagMixin',
    'CatalogEntryMixin',

    # Managers & QuerySets
    'BaseQuerySet',
    'BaseManager',
    'ActiveQuerySet',
    'ActiveManager',

    # Exceptions
    'ConflictError',
]
