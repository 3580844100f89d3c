from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from HR.attendance_regularization.serializers import (
    RegularizationCreateSerializer,
    RegularizationReviewSerializer,
    RegularizationSerializer,
)
from HR.attendance_regularization.services import RegularizationService
from HR.work_structures.views.common import error_detail
from core.user_accounts.decorators import require_roles
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response


# Own requests

@api_view(['POST'])
@require_roles(*COMPANY_ROLES)
def regularization_create(request):
    """
    POST /hr/regularizations/
    - Request body: { "date", "request_type", "requested_check_in_time"?,
      "requested_check_out_time"?, "reason", "employee_id"? }
    - Times are HH:mm or HH:mm:ss
    """
    serializer = RegularizationCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        regularization = RegularizationService.create(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)

    return success_response(
        data=RegularizationSerializer(regularization).data,
        message='Regularization request submitted',
        status_code=status.HTTP_201_CREATED
    )


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
@auto_paginate
def my_regularizations(request):
    """GET /hr/regularizations/me/?status=&date_from=&date_to="""
    filters = {key: request.query_params.get(key) for key in ('status', 'date_from', 'date_to')}
    regularizations = RegularizationService.my_requests(request.user, filters)
    return Response(RegularizationSerializer(regularizations, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
def my_regularization_detail(request, pk):
    regularization = RegularizationService.my_request(request.user, pk)
    return Response(RegularizationSerializer(regularization).data, status=status.HTTP_200_OK)


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_ROLES)
def cancel_regularization(request, pk):
    try:
        regularization = RegularizationService.cancel(request.user, pk)
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return success_response(data=RegularizationSerializer(regularization).data, message='Regularization cancelled')


# Review

@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
@auto_paginate
def regularization_list(request):
    """
    GET /hr/regularizations/admin/
    - Filters: status, employee_id, department_id, request_type, date_from, date_to
    """
    filters = {
        key: request.query_params.get(key) for key in (
            'status', 'employee_id', 'department_id', 'request_type', 'date_from', 'date_to'
        )
    }
    regularizations = RegularizationService.list_requests(request.user, filters)
    return Response(RegularizationSerializer(regularizations, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_roles(*COMPANY_LEVEL_ROLES)
def regularization_detail(request, pk):
    regularization = RegularizationService.get_request(request.user, pk)
    return Response(RegularizationSerializer(regularization).data, status=status.HTTP_200_OK)


def _review(request, pk, action, message):
    data = request.data.copy()
    data['regularization_id'] = pk

    serializer = RegularizationReviewSerializer(data=data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        regularization = action(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return success_response(data=RegularizationSerializer(regularization).data, message=message)


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
def approve_regularization(request, pk):
    """
    PATCH /hr/regularizations/admin/<id>/approve/
    - Optional body: { "review_note" }
    - Rewrites the attendance day with the requested times
    """
    return _review(request, pk, RegularizationService.approve, 'Regularization approved')


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
def reject_regularization(request, pk):
    return _review(request, pk, RegularizationService.reject, 'Regularization rejected')
