from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from core.base.uploads import payload_with
from HR.person.serializers import (
    EmployeeSerializer,
    EmployeeCreateSerializer,
    EmployeeUpdateSerializer,
    EmployeeStatusSerializer,
)
from HR.person.services import EmployeeService
from core.user_accounts.decorators import require_roles, role_for_method
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES, HR_ADMIN_ROLES
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response

EMPLOYEE_GUARD = {
    'GET': COMPANY_LEVEL_ROLES,
    'POST': HR_ADMIN_ROLES,
    'PUT': HR_ADMIN_ROLES,
    'DELETE': HR_ADMIN_ROLES,
}


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else ' '.join(e.messages)


@api_view(['GET', 'POST'])
@parser_classes([JSONParser, MultiPartParser, FormParser])
@role_for_method(EMPLOYEE_GUARD)
@auto_paginate
def employee_list(request):
    """
    List employees or create a new employee.

    GET /hr/person/employees/
    - Filters: search, department_id, designation_id, work_shift_id, status,
      employment_type, join_date_from, join_date_to, sort_by, sort_order

    POST /hr/person/employees/
    - Creates the login user (role employee) and the employee record
    - Accepts multipart/form-data with an optional "image" photo
    """
    if request.method == 'GET':
        params = request.query_params
        filters = {
            key: params.get(key) for key in (
                'search', 'department_id', 'designation_id', 'work_shift_id', 'status',
                'employment_type', 'join_date_from', 'join_date_to', 'sort_by', 'sort_order'
            )
        }
        employees = EmployeeService.list_employees(request.user, filters)
        serializer = EmployeeSerializer(employees, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = EmployeeCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            employee = EmployeeService.create(request.user, serializer.to_dto())
            return Response(EmployeeSerializer(employee).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@parser_classes([JSONParser, MultiPartParser, FormParser])
@role_for_method(EMPLOYEE_GUARD)
def employee_detail(request, pk):
    """
    Retrieve, update or remove an employee.

    DELETE terminates the employee and deactivates the login user;
    DELETE ?hard=true removes both permanently (company admin only).
    """
    if request.method == 'GET':
        employee = EmployeeService.get_employee(request.user, pk)
        return Response(EmployeeSerializer(employee).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = payload_with(request, employee_id=pk)
        serializer = EmployeeUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                employee = EmployeeService.update(request.user, serializer.to_dto())
                return Response(EmployeeSerializer(employee).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    hard = request.query_params.get('hard', '').lower() == 'true'
    EmployeeService.delete(request.user, pk, hard=hard)
    return Response(status=status.HTTP_204_NO_CONTENT)


@api_view(['PATCH', 'POST'])
@require_roles(*HR_ADMIN_ROLES)
def employee_status(request, pk):
    """
    PATCH /hr/person/employees/<id>/status/
    - Request body: { "status": "active" | "on_leave" | "terminated" }
    """
    data = request.data.copy()
    data['employee_id'] = pk

    serializer = EmployeeStatusSerializer(data=data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    employee = EmployeeService.update_status(request.user, serializer.to_dto())
    return success_response(
        data=EmployeeSerializer(employee).data,
        message='Employee status updated successfully'
    )


@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
def employee_statistics(request):
    return success_response(
        data=EmployeeService.statistics(request.user),
        message='Employee statistics retrieved successfully'
    )


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
def my_profile(request):
    """Employee record of the signed-in user."""
    employee = EmployeeService.my_profile(request.user)
    return Response(EmployeeSerializer(employee).data, status=status.HTTP_200_OK)
