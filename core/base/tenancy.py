"""
Tenant scoping helpers used by every company-scoped service.
"""
from django.core.exceptions import PermissionDenied, ValidationError

from core.companies.models import CompanyStatus


def require_company(user):
    """
    Return the caller's company.

    Raises:
        PermissionDenied: For users without a company (super admin)
    """
    if user.company_id is None:
        raise PermissionDenied('This action is only available to company-level users')
    return user.company


def require_active_company(user, resource_plural):
    """
    Return the caller's company, refusing suspended or archived tenants.

    Raises:
        PermissionDenied: For users without a company
        ValidationError: If the company is not active
    """
    company = require_company(user)
    if company.status != CompanyStatus.ACTIVE:
        raise ValidationError(f'Cannot create {resource_plural} for a suspended or archived company')
    return company


def ensure_same_company(user, obj, resource_plural):
    """
    Raises:
        PermissionDenied: If obj belongs to a company other than the caller's
    """
    if obj.company_id != user.company_id:
        raise PermissionDenied(f'You can only access {resource_plural} from your own company')
