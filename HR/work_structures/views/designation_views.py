from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from HR.work_structures.serializers import (
    DesignationReadSerializer,
    DesignationCreateSerializer,
    DesignationUpdateSerializer,
)
from HR.work_structures.services import DesignationService
from HR.work_structures.views.common import catalog_filters, error_detail, WRITE_GUARD
from core.user_accounts.decorators import role_for_method
from hrm_project.pagination import auto_paginate


@api_view(['GET', 'POST'])
@role_for_method(WRITE_GUARD)
@auto_paginate
def designation_list(request):
    """
    List designations of the caller's company or create a new one.

    GET /hr/work_structures/designations/
    - Filters: is_active, search (name/code/description), sort_by, sort_order

    POST /hr/work_structures/designations/
    - Request body: { "name", "code"?, "description"?, "is_active"? }
    """
    if request.method == 'GET':
        designations = DesignationService.list(request.user, catalog_filters(request))
        serializer = DesignationReadSerializer(designations, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = DesignationCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            designation = DesignationService.create(request.user, serializer.to_dto())
            return Response(DesignationReadSerializer(designation).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@role_for_method(WRITE_GUARD)
def designation_detail(request, pk):
    """Retrieve, update or delete a designation."""
    if request.method == 'GET':
        designation = DesignationService.get(request.user, pk)
        return Response(DesignationReadSerializer(designation).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = request.data.copy()
        data['designation_id'] = pk

        serializer = DesignationUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                designation = DesignationService.update(request.user, serializer.to_dto())
                return Response(DesignationReadSerializer(designation).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        DesignationService.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
