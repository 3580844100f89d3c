from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from core.base.uploads import payload_with
from core.companies.serializers import (
    CompanyReadSerializer,
    CompanyDetailSerializer,
    CompanyWithAdminCreateSerializer,
    CompanyUpdateSerializer,
    CompanyStatusSerializer,
)
from core.companies.services import CompanyService
from core.user_accounts.decorators import require_roles
from core.user_accounts.models import UserRole
from core.user_accounts.serializers import UserReadSerializer
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else ' '.join(e.messages)


@api_view(['GET', 'POST'])
@parser_classes([JSONParser, MultiPartParser, FormParser])
@require_roles(UserRole.SUPER_ADMIN)
@auto_paginate
def company_list(request):
    """
    List all companies or create a company with its admin.

    GET /core/companies/
    - Filters: search (name/code), status, sort_by, sort_order

    POST /core/companies/
    - Creates the company and a company_admin user in one transaction
    - Accepts multipart/form-data with an optional "logo" image
    """
    if request.method == 'GET':
        filters = {
            'search': request.query_params.get('search'),
            'status': request.query_params.get('status'),
            'sort_by': request.query_params.get('sort_by'),
            'sort_order': request.query_params.get('sort_order'),
        }
        companies = CompanyService.list_companies(filters)
        serializer = CompanyReadSerializer(companies, many=True)
        return Response(serializer.data, status=status.HTTP_200_OK)

    serializer = CompanyWithAdminCreateSerializer(data=request.data)
    if serializer.is_valid():
        try:
            company, admin = CompanyService.create_with_admin(request.user, serializer.to_dto())
            return success_response(
                data={
                    'company': CompanyReadSerializer(company).data,
                    'admin': UserReadSerializer(admin).data,
                },
                message='Company and admin created successfully',
                status_code=status.HTTP_201_CREATED
            )
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@parser_classes([JSONParser, MultiPartParser, FormParser])
@require_roles(UserRole.SUPER_ADMIN)
def company_detail(request, pk):
    """
    Retrieve, update or delete a company.
    """
    if request.method == 'GET':
        company = CompanyService.get_company(pk)
        return Response(CompanyDetailSerializer(company).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = payload_with(request, company_id=pk)
        serializer = CompanyUpdateSerializer(data=data)
        if serializer.is_valid():
            try:
                company = CompanyService.update(request.user, serializer.to_dto())
                return Response(CompanyDetailSerializer(company).data, status=status.HTTP_200_OK)
            except ValidationError as e:
                return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        CompanyService.delete(request.user, pk)
        return Response(status=status.HTTP_204_NO_CONTENT)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)


@api_view(['PATCH', 'POST'])
@require_roles(UserRole.SUPER_ADMIN)
def company_status(request, pk):
    """
    PATCH /core/companies/<id>/status/
    - Request body: { "status": "active" | "suspended" | "archived" }
    """
    data = request.data.copy()
    data['company_id'] = pk

    serializer = CompanyStatusSerializer(data=data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    company = CompanyService.update_status(request.user, serializer.to_dto())
    return success_response(
        data=CompanyDetailSerializer(company).data,
        message=f'Company status updated to {company.status}'
    )
