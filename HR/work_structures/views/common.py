from core.user_accounts.models import COMPANY_LEVEL_ROLES, HR_ADMIN_ROLES

# Company-level roles read, HR admins write
WRITE_GUARD = {
    'GET': COMPANY_LEVEL_ROLES,
    'POST': HR_ADMIN_ROLES,
    'PUT': HR_ADMIN_ROLES,
    'DELETE': HR_ADMIN_ROLES,
}


def error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else ' '.join(e.messages)


def catalog_filters(request):
    return {
        'is_active': request.query_params.get('is_active'),
        'search': request.query_params.get('search'),
        'sort_by': request.query_params.get('sort_by'),
        'sort_order': request.query_params.get('sort_order'),
    }
