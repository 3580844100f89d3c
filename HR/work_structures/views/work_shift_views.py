from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from HR.work_structures.serializers import (
    WorkShiftReadSerializer,
    WorkShiftCreateSerializer,
    WorkShiftUpdateSerializer,
)
from HR.work_structures.services import WorkShiftService
from HR.work_structures.views.common import catalog_filters, error_detail, WRITE_GUARD
from core.user_accounts.decorators import role_for_method
from hrm_project.pagination import auto_paginate


@api_view(['GET', 'POST'])
@role_for_method(WRITE_GUARD)
@auto_paginate
def work_shift_list(request):
    """
    List work shifts of the caller's company or create a new one.

    GET /hr/work_structures/work-shifts/
    - Filters: is_active, search (name/code/description), sort_by, sort_order

    POST /hr/work_structures/work-shifts/
    - Request body: { "name", "start_time", "end_time", "code"?, ... }
    - Times accept HH:mm or HH:mm:ss; end before start means an overnight shift
    """
    if request.method == 'GET':
        work_shifts = WorkShiftService.list(request.user, catalog_filters(request))
        serializer = WorkShiftReadSerializer(work_shifts, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = WorkShiftCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            work_shift = WorkShiftService.create(request.user, serializer.to_dto())
            return Response(WorkShiftReadSerializer(work_shift).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@role_for_method(WRITE_GUARD)
def work_shift_detail(request, pk):
    """
    Retrieve, update or delete a work shift.
    """
    if request.method == 'GET':
        work_shift = WorkShiftService.get(request.user, pk)
        return Response(WorkShiftReadSerializer(work_shift).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = request.data.copy()
        data['work_shift_id'] = pk

        serializer = WorkShiftUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                work_shift = WorkShiftService.update(request.user, serializer.to_dto())
                return Response(WorkShiftReadSerializer(work_shift).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        WorkShiftService.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
