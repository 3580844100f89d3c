"""
Automatic Pagination for Function-Based Views

List views return plain serializer data; the @auto_paginate decorator slices
it into a page and emits the standard envelope:
{
    "status": "success",
    "message": "",
    "data": {
        "count": 57,
        "page": 2,
        "page_size": 20,
        "total_pages": 3,
        "has_next": true,
        "has_previous": true,
        "next": "...?page=3",
        "previous": "...?page=1",
        "results": [...]
    }
}
"""
from functools import wraps

from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class StandardResultsSetPagination(PageNumberPagination):
    """
    Standard pagination class for the project.

    Query Parameters:
    - page: Page number (default: 1); out of range values are clamped to
      the first or last page
    - page_size (alias: limit): Items per page (default: 20, clamped to 1..100)
    """
    page_size = 20
    page_size_query_param = 'page_size'
    page_size_alias = 'limit'
    max_page_size = 100

    def get_page_size(self, request):
        for param in (self.page_size_query_param, self.page_size_alias):
            value = request.query_params.get(param)
            if value:
                try:
                    return min(max(int(value), 1), self.max_page_size)
                except ValueError:
                    break
        return self.page_size

    def get_page_number(self, request, paginator):
        try:
            number = int(request.query_params.get(self.page_query_param, 1))
        except (TypeError, ValueError):
            return 1
        return min(max(number, 1), max(paginator.num_pages, 1))

    def get_paginated_response(self, data):
        return Response({
            'status': 'success',
            'message': '',
            'data': {
                'count': self.page.paginator.count,
                'page': self.page.number,
                'page_size': self.page.paginator.per_page,
                'total_pages': self.page.paginator.num_pages,
                'has_next': self.page.has_next(),
                'has_previous': self.page.has_previous(),
                'next': self.get_next_link(),
                'previous': self.get_previous_link(),
                'results': data
            }
        })


def auto_paginate(view_func):
    """
    Paginate list responses of function-based views.

    Usage:
        @api_view(['GET', 'POST'])
        @require_roles(*COMPANY_LEVEL_ROLES)
        @auto_paginate
        def department_list(request):
            if request.method == 'GET':
                serializer = DepartmentReadSerializer(queryset, many=True)
                return Response(serializer.data)
            ...

    Only GET responses whose data is a list are paginated; detail views and
    write responses pass through untouched.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        response = view_func(request, *args, **kwargs)

        if (
            request.method == 'GET' and
            isinstance(response, Response) and
            isinstance(response.data, list)
        ):
            paginator = StandardResultsSetPagination()
            page = paginator.paginate_queryset(response.data, request)

            if page is not None:
                return paginator.get_paginated_response(page)

        return response

    return wrapper
