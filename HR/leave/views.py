from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from HR.leave.serializers import (
    LeaveRequestCreateSerializer,
    LeaveRequestSerializer,
    LeaveReviewSerializer,
    LeaveTypeCreateSerializer,
    LeaveTypeReadSerializer,
    LeaveTypeUpdateSerializer,
)
from HR.leave.services import LeaveRequestService, LeaveTypeService
from HR.work_structures.views.common import catalog_filters, error_detail
from core.user_accounts.decorators import require_roles, role_for_method
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES, HR_ADMIN_ROLES
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response

# Every company role reads leave types; HR admins maintain them
LEAVE_TYPE_GUARD = {
    'GET': COMPANY_ROLES,
    'POST': HR_ADMIN_ROLES,
    'PUT': HR_ADMIN_ROLES,
    'DELETE': HR_ADMIN_ROLES,
}


# Leave types

@api_view(['GET', 'POST'])
@role_for_method(LEAVE_TYPE_GUARD)
@auto_paginate
def leave_type_list(request):
    """
    GET /hr/leave/types/
    - Filters: is_active, search, sort_by, sort_order

    POST /hr/leave/types/
    - Request body: { "name", "code"?, "description"?, "is_active"? }
    """
    if request.method == 'GET':
        leave_types = LeaveTypeService.list(request.user, catalog_filters(request))
        return Response(LeaveTypeReadSerializer(leave_types, many=True).data, status=status.HTTP_200_OK)

    serializer = LeaveTypeCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            leave_type = LeaveTypeService.create(request.user, serializer.to_dto())
            return Response(LeaveTypeReadSerializer(leave_type).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@role_for_method(LEAVE_TYPE_GUARD)
def leave_type_detail(request, pk):
    """DELETE is refused while leave requests use the type."""
    if request.method == 'GET':
        leave_type = LeaveTypeService.get(request.user, pk)
        return Response(LeaveTypeReadSerializer(leave_type).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = request.data.copy()
        data['leave_type_id'] = pk

        serializer = LeaveTypeUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                leave_type = LeaveTypeService.update(request.user, serializer.to_dto())
                return Response(LeaveTypeReadSerializer(leave_type).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        LeaveTypeService.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)


# Own requests

@api_view(['POST'])
@require_roles(*COMPANY_ROLES)
def leave_request_create(request):
    """
    POST /hr/leave/requests/
    - Request body: { "leave_type_id", "start_date", "end_date", "reason", "employee_id"? }
    """
    serializer = LeaveRequestCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        leave_request = LeaveRequestService.create_request(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)

    return success_response(
        data=LeaveRequestSerializer(leave_request).data,
        message='Leave request submitted',
        status_code=status.HTTP_201_CREATED
    )


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
@auto_paginate
def my_leave_requests(request):
    """GET /hr/leave/requests/me/?status=&date_from=&date_to="""
    filters = {key: request.query_params.get(key) for key in ('status', 'date_from', 'date_to')}
    requests = LeaveRequestService.my_requests(request.user, filters)
    return Response(LeaveRequestSerializer(requests, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
def my_leave_request_detail(request, pk):
    leave_request = LeaveRequestService.my_request(request.user, pk)
    return Response(LeaveRequestSerializer(leave_request).data, status=status.HTTP_200_OK)


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_ROLES)
def cancel_leave_request(request, pk):
    try:
        leave_request = LeaveRequestService.cancel(request.user, pk)
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return success_response(data=LeaveRequestSerializer(leave_request).data, message='Leave request cancelled')


# Review

@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
@auto_paginate
def leave_request_list(request):
    """
    GET /hr/leave/requests/admin/
    - Filters: status, employee_id, department_id, leave_type_id, date_from, date_to
    """
    filters = {
        key: request.query_params.get(key) for key in (
            'status', 'employee_id', 'department_id', 'leave_type_id', 'date_from', 'date_to'
        )
    }
    requests = LeaveRequestService.list_requests(request.user, filters)
    return Response(LeaveRequestSerializer(requests, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
def leave_request_detail(request, pk):
    leave_request = LeaveRequestService.get_request(request.user, pk)
    return Response(LeaveRequestSerializer(leave_request).data, status=status.HTTP_200_OK)


def _review(request, pk, action, message):
    data = request.data.copy()
    data['request_id'] = pk

    serializer = LeaveReviewSerializer(data=data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        leave_request = action(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return success_response(data=LeaveRequestSerializer(leave_request).data, message=message)


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
def approve_leave_request(request, pk):
    """
    PATCH /hr/leave/requests/admin/<id>/approve/
    - Optional body: { "review_note" }
    """
    return _review(request, pk, LeaveRequestService.approve, 'Leave request approved')


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
def reject_leave_request(request, pk):
    return _review(request, pk, LeaveRequestService.reject, 'Leave request rejected')
