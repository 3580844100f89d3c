from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view
from rest_framework.response import Response

from HR.notices.serializers import (
    MyNoticeSerializer,
    NoticeCreateSerializer,
    NoticeDetailSerializer,
    NoticeSerializer,
    NoticeUpdateSerializer,
)
from HR.notices.services import NoticeService
from HR.work_structures.views.common import error_detail
from core.user_accounts.decorators import require_roles
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response


# Authoring

@api_view(['GET', 'POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
@auto_paginate
def notice_list(request):
    """
    GET /hr/notices/
    - Filters: status, priority, is_company_wide, created_by, publish_from,
      publish_to, search, sort_by, sort_order

    POST /hr/notices/
    - Request body: { "title", "body", "priority"?, "status"?, "publish_at"?,
      "expires_at"?, "is_company_wide"?, "audiences"?: [{ "audience_type", ... }] }
    """
    if request.method == 'GET':
        filters = {
            key: request.query_params.get(key) for key in (
                'status', 'priority', 'is_company_wide', 'created_by', 'publish_from',
                'publish_to', 'search', 'sort_by', 'sort_order'
            )
        }
        notices = NoticeService.list_notices(request.user, filters)
        return Response(NoticeSerializer(notices, many=True).data, status=status.HTTP_200_OK)

    serializer = NoticeCreateSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        notice = NoticeService.create(request.user, serializer.to_dto())
    except ValidationError as e:
        return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)

    return success_response(
        data=NoticeSerializer(notice).data,
        message='Notice created successfully',
        status_code=status.HTTP_201_CREATED
    )


@api_view(['GET', 'PUT', 'PATCH', 'DELETE'])
@require_roles(*COMPANY_LEVEL_ROLES)
def notice_detail(request, pk):
    """GET includes the read receipts; PUT/PATCH audiences replace the old ones."""
    if request.method == 'GET':
        notice = NoticeService.get_notice(request.user, pk)
        return Response(NoticeDetailSerializer(notice).data, status=status.HTTP_200_OK)

    if request.method in ['PUT', 'PATCH']:
        data = request.data.copy()
        data['notice_id'] = pk

        serializer = NoticeUpdateSerializer(data=data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
        try:
            notice = NoticeService.update(request.user, serializer.to_dto())
        except ValidationError as e:
            return Response(error_detail(e), status=status.HTTP_400_BAD_REQUEST)
        return Response(NoticeSerializer(notice).data, status=status.HTTP_200_OK)

    NoticeService.delete(request.user, pk)
    return Response(status=status.HTTP_204_NO_CONTENT)


# Employee feed

@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
@auto_paginate
def my_notices(request):
    """GET /hr/notices/me/?search=&unread_only=true"""
    filters = {key: request.query_params.get(key) for key in ('search', 'unread_only')}
    notices = NoticeService.my_notices(request.user, filters)
    return Response(MyNoticeSerializer(notices, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
def my_notice_detail(request, pk):
    notice = NoticeService.my_notice(request.user, pk)
    return Response(MyNoticeSerializer(notice).data, status=status.HTTP_200_OK)


@api_view(['PATCH', 'POST'])
@require_roles(*COMPANY_ROLES)
def mark_notice_read(request, pk):
    receipt = NoticeService.mark_read(request.user, pk)
    return success_response(
        data={'notice_id': receipt.notice_id, 'is_read': True, 'read_at': receipt.read_at},
        message='Notice marked as read'
    )
