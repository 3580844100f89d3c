"""
Role decorators for function-based views.
"""
from functools import wraps

from rest_framework import status
from rest_framework.response import Response


def require_roles(*roles, company_required=None):
    """
    Decorator to restrict a function-based view to the given user roles.

    Args:
        *roles: Allowed UserRole values
        company_required: Also require request.user.company. Defaults to True
            unless super_admin is among the allowed roles.

    Usage:
        @api_view(['GET', 'POST'])
        @require_roles(UserRole.COMPANY_ADMIN, UserRole.HR_MANAGER)
        def designation_list(request):
            ...
    """
    needs_company = company_required
    if needs_company is None:
        needs_company = 'super_admin' not in roles

    def decorator(view_func):
        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            if not request.user.is_authenticated:
                return Response(
                    {'error': 'Authentication required'},
                    status=status.HTTP_401_UNAUTHORIZED
                )

            if request.user.role not in roles:
                return Response(
                    {
                        'error': 'Permission denied',
                        'detail': f"Role '{request.user.role}' cannot access this resource",
                        'allowed_roles': list(roles),
                    },
                    status=status.HTTP_403_FORBIDDEN
                )

            if needs_company and request.user.company_id is None:
                return Response(
                    {
                        'error': 'Permission denied',
                        'detail': 'This endpoint is only for company-level users',
                    },
                    status=status.HTTP_403_FORBIDDEN
                )

            return view_func(request, *args, **kwargs)

        # Metadata for introspection/documentation
        wrapper.allowed_roles = roles

        return wrapper
    return decorator


def role_for_method(method_roles):
    """
    Decorator for views whose allowed roles depend on the HTTP method.

    Usage:
        @api_view(['GET', 'POST'])
        @role_for_method({
            'GET': COMPANY_LEVEL_ROLES,
            'POST': (UserRole.COMPANY_ADMIN, UserRole.HR_MANAGER),
        })
        def department_list(request):
            ...
    """
    def decorator(view_func):
        guarded = {
            method: require_roles(*roles)(view_func)
            for method, roles in method_roles.items()
        }

        @wraps(view_func)
        def wrapper(request, *args, **kwargs):
            method = 'PUT' if request.method == 'PATCH' and 'PATCH' not in guarded else request.method
            handler = guarded.get(method)
            if handler is None:
                return Response(
                    {'error': f'Method {request.method} not allowed'},
                    status=status.HTTP_405_METHOD_NOT_ALLOWED
                )
            return handler(request, *args, **kwargs)

        return wrapper
    return decorator
