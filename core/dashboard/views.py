from rest_framework.decorators import api_view

from core.dashboard.services import DashboardService
from core.user_accounts.decorators import require_roles
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES, UserRole
from hrm_project.response_formatter import success_response


@api_view(['GET'])
@require_roles(UserRole.SUPER_ADMIN)
def super_admin_dashboard(request):
    """GET /core/dashboard/super-admin/"""
    return success_response(
        data=DashboardService.super_admin_summary(),
        message='Dashboard retrieved successfully'
    )


@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
def company_dashboard(request):
    """GET /core/dashboard/company/"""
    return success_response(
        data=DashboardService.company_summary(request.user),
        message='Dashboard retrieved successfully'
    )


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
def my_dashboard(request):
    """GET /core/dashboard/me/"""
    return success_response(
        data=DashboardService.employee_summary(request.user),
        message='Dashboard retrieved successfully'
    )
