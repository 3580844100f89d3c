from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.decorators import api_view, parser_classes
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response

from HR.attendance import excel_utils
from HR.attendance.serializers import (
    AttendanceDaySerializer,
    AttendanceUpdateSerializer,
    CheckInOutSerializer,
    ManualAttendanceSerializer,
    MarkAbsentsSerializer,
)
from HR.attendance.services import AttendanceService
from core.user_accounts.decorators import require_roles, role_for_method
from core.user_accounts.models import COMPANY_LEVEL_ROLES, COMPANY_ROLES, HR_ADMIN_ROLES
from hrm_project.pagination import auto_paginate
from hrm_project.response_formatter import success_response

ATTENDANCE_LIST_FILTERS = (
    'employee_id', 'department_id', 'designation_id', 'shift_id', 'status', 'date_from', 'date_to'
)


def _error_detail(e):
    return e.message_dict if hasattr(e, 'message_dict') else ' '.join(e.messages)


def _client_ip(request):
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')


def _list_filters(request):
    return {key: request.query_params.get(key) for key in ATTENDANCE_LIST_FILTERS}


def _check(request, action, message):
    serializer = CheckInOutSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    dto = serializer.to_dto(
        ip_address=_client_ip(request),
        user_agent=request.META.get('HTTP_USER_AGENT', '')
    )
    try:
        day = action(request.user, dto)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return success_response(data=AttendanceDaySerializer(day).data, message=message)


@api_view(['POST'])
@require_roles(*COMPANY_ROLES)
def check_in(request):
    """
    POST /hr/attendance/check-in/
    - Optional body: { "employee_id": 5 } (company-level roles only)
    """
    return _check(request, AttendanceService.check_in, 'Checked in successfully')


@api_view(['POST'])
@require_roles(*COMPANY_ROLES)
def check_out(request):
    """POST /hr/attendance/check-out/"""
    return _check(request, AttendanceService.check_out, 'Checked out successfully')


@api_view(['GET'])
@require_roles(*COMPANY_ROLES)
@auto_paginate
def my_attendance(request):
    """
    GET /hr/attendance/me/?date_from=2025-01-01&date_to=2025-01-31
    """
    filters = {key: request.query_params.get(key) for key in ('date_from', 'date_to')}
    days = AttendanceService.my_attendance(request.user, filters)
    return Response(AttendanceDaySerializer(days, many=True).data, status=status.HTTP_200_OK)


@api_view(['GET', 'POST'])
@role_for_method({'GET': COMPANY_LEVEL_ROLES, 'POST': HR_ADMIN_ROLES})
@auto_paginate
def attendance_list(request):
    """
    List company attendance or record a day manually.

    GET /hr/attendance/
    - Filters: employee_id, department_id, designation_id, shift_id, status,
      date_from, date_to

    POST /hr/attendance/
    - Creates or overwrites the day of employee_id on date
    """
    if request.method == 'GET':
        days = AttendanceService.list_attendance(request.user, _list_filters(request))
        return Response(AttendanceDaySerializer(days, many=True).data, status=status.HTTP_200_OK)

    serializer = ManualAttendanceSerializer(data=request.data)
    if serializer.is_valid():
        try:
            day = AttendanceService.create_manual(request.user, serializer.to_dto())
            return Response(AttendanceDaySerializer(day).data, status=status.HTTP_201_CREATED)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET', 'PUT', 'PATCH'])
@role_for_method({'GET': COMPANY_LEVEL_ROLES, 'PUT': HR_ADMIN_ROLES})
def attendance_detail(request, pk):
    if request.method == 'GET':
        day = AttendanceService.get_attendance(request.user, pk)
        return Response(AttendanceDaySerializer(day).data, status=status.HTTP_200_OK)

    data = request.data.copy()
    data['attendance_id'] = pk

    serializer = AttendanceUpdateSerializer(data=data)
    if serializer.is_valid():
        try:
            day = AttendanceService.update_attendance(request.user, serializer.to_dto())
            return Response(AttendanceDaySerializer(day).data, status=status.HTTP_200_OK)
        except ValidationError as e:
            return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)
    return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


@api_view(['GET'])
@require_roles(*HR_ADMIN_ROLES)
def export_attendance(request):
    """
    GET /hr/attendance/export/?file_format=csv|xlsx&<list filters>
    """
    try:
        return AttendanceService.export(
            request.user,
            _list_filters(request),
            request.query_params.get('file_format', 'csv')
        )
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)


@api_view(['POST'])
@parser_classes([MultiPartParser, FormParser])
@require_roles(*HR_ADMIN_ROLES)
def import_attendance(request):
    """
    POST /hr/attendance/import/
    - multipart form with "file" (.csv or .xlsx)
    """
    uploaded = request.FILES.get('file')
    if uploaded is None:
        return Response({'file': 'No file uploaded'}, status=status.HTTP_400_BAD_REQUEST)

    try:
        summary = AttendanceService.import_file(request.user, uploaded)
    except ValidationError as e:
        return Response(_error_detail(e), status=status.HTTP_400_BAD_REQUEST)

    return success_response(
        data=summary,
        message=summary.get('message') or 'Attendance import completed'
    )


@api_view(['GET'])
@require_roles(*HR_ADMIN_ROLES)
def import_template(request):
    return excel_utils.create_import_template()


@api_view(['POST'])
@require_roles(*COMPANY_LEVEL_ROLES)
def mark_absents(request):
    """
    POST /hr/attendance/mark-absents/
    - Optional body: { "date": "2025-01-15" } (defaults to today)
    """
    serializer = MarkAbsentsSerializer(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    result = AttendanceService.mark_absents(request.user, serializer.validated_data.get('date'))
    message = (
        'Selected date is a weekly off; no absentees marked' if result['skipped']
        else f"Marked {result['created']} employee(s) absent"
    )
    return success_response(data=result, message=message)
