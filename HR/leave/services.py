"""
Leave Service - Business Logic Layer

Handles:
- Leave type catalog (per company)
- Leave request lifecycle: submit, cancel (requester), approve / reject
  (company-level reviewer)
- Writing ON_LEAVE attendance days when a request is approved
"""
import logging
from datetime import date, timedelta

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.http import Http404
from django.utils import timezone

from core.base.exceptions import ConflictError
from core.base.services import TenantCatalogService
from core.base.tenancy import require_company, ensure_same_company
from core.user_accounts.models import COMPANY_LEVEL_ROLES
from HR.attendance.metrics import is_weekly_off
from HR.attendance.models import AttendanceDay, AttendanceSource, AttendanceStatus
from HR.leave.dtos import LeaveRequestCreateDTO, LeaveReviewDTO
from HR.leave.models import LeaveRequest, LeaveRequestStatus, LeaveType, OPEN_STATUSES
from HR.person.models import Employee

logger = logging.getLogger(__name__)


def build_leave_dates(start: date, end: date) -> list:
    """Dates from start to end inclusive, weekly off days left out."""
    dates = []
    current = start
    while current <= end:
        if not is_weekly_off(current):
            dates.append(current)
        current += timedelta(days=1)
    return dates


class LeaveTypeService(TenantCatalogService):
    """Service for LeaveType business logic"""
    model = LeaveType
    label = 'leave type'
    label_plural = 'leave types'
    pk_field = 'leave_type_id'

    @classmethod
    def usage_count(cls, instance) -> int:
        return instance.requests.count()

    @classmethod
    def usage_message(cls, instance, count) -> str:
        return f'Cannot delete leave type. {count} leave request(s) use this leave type.'


class LeaveRequestService:
    """Service layer for leave requests"""

    @staticmethod
    def _resolve_employee(user, employee_id=None) -> Employee:
        """
        Raises:
            PermissionDenied: employee_id from a non company-level user, or an
                employee of another company
            Http404: Unknown employee, or the caller has no employee record
        """
        if employee_id:
            if user.role not in COMPANY_LEVEL_ROLES:
                raise PermissionDenied('You cannot create leave requests for other employees')
            try:
                employee = Employee.objects.get(pk=employee_id)
            except Employee.DoesNotExist:
                raise Http404(f'Employee with ID "{employee_id}" not found')
            ensure_same_company(user, employee, 'employees')
            return employee

        try:
            return Employee.objects.get(user=user)
        except Employee.DoesNotExist:
            raise Http404('Employee profile not found for current user')

    @staticmethod
    def _resolve_leave_type(company, leave_type_id) -> LeaveType:
        try:
            leave_type = LeaveType.objects.get(pk=leave_type_id)
        except LeaveType.DoesNotExist:
            raise Http404(f'Leave type with ID "{leave_type_id}" not found')
        if leave_type.company_id != company.id:
            raise PermissionDenied('Leave type does not belong to your company')
        if not leave_type.is_active:
            raise ValidationError({'leave_type_id': 'Leave type is inactive'})
        return leave_type

    @staticmethod
    def _ensure_no_overlap(employee_id, start, end, exclude_pk=None):
        overlapping = LeaveRequest.objects.filter(
            employee_id=employee_id,
            status__in=OPEN_STATUSES,
            start_date__lte=end,
            end_date__gte=start,
        )
        if exclude_pk is not None:
            overlapping = overlapping.exclude(pk=exclude_pk)
        if overlapping.exists():
            raise ConflictError('A leave request already exists for the selected date range')

    @staticmethod
    def _with_relations(queryset):
        return queryset.select_related('employee', 'leave_type', 'reviewed_by')

    # Requester side

    @staticmethod
    @transaction.atomic
    def create_request(user, dto: LeaveRequestCreateDTO) -> LeaveRequest:
        """
        Submit a PENDING leave request for the caller (or, for company-level
        users, for employee_id).

        Raises:
            ValidationError: Bad range, inactive type, or weekly offs only
            ConflictError: Overlaps a pending or approved request
        """
        require_company(user)
        employee = LeaveRequestService._resolve_employee(user, dto.employee_id)
        leave_type = LeaveRequestService._resolve_leave_type(employee.company, dto.leave_type_id)

        if dto.start_date > dto.end_date:
            raise ValidationError({'end_date': 'Start date must be before or equal to end date'})

        LeaveRequestService._ensure_no_overlap(employee.id, dto.start_date, dto.end_date)

        dates = build_leave_dates(dto.start_date, dto.end_date)
        if not dates:
            raise ValidationError('Leave range contains only weekend days')

        leave_request = LeaveRequest.objects.create(
            company_id=employee.company_id,
            employee=employee,
            leave_type=leave_type,
            start_date=dto.start_date,
            end_date=dto.end_date,
            total_days=len(dates),
            reason=dto.reason,
            status=LeaveRequestStatus.PENDING,
            created_by=user,
            updated_by=user,
        )
        logger.info(
            "Leave request %s submitted for %s (%s to %s) by %s",
            leave_request.pk, employee.employee_code, dto.start_date, dto.end_date, user.email
        )
        return leave_request

    @staticmethod
    def my_requests(user, filters: dict = None) -> QuerySet:
        """
        Args:
            filters: status, date_from (start_date >=), date_to (end_date <=)
        """
        filters = filters or {}
        employee = LeaveRequestService._resolve_employee(user)

        queryset = LeaveRequestService._with_relations(LeaveRequest.objects.filter(employee=employee))
        if filters.get('status'):
            queryset = queryset.filter(status=filters['status'])
        if filters.get('date_from'):
            queryset = queryset.filter(start_date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(end_date__lte=filters['date_to'])
        return queryset

    @staticmethod
    def my_request(user, request_id) -> LeaveRequest:
        employee = LeaveRequestService._resolve_employee(user)
        leave_request = LeaveRequestService._with_relations(
            LeaveRequest.objects.filter(pk=request_id, employee=employee)
        ).first()
        if leave_request is None:
            raise Http404('Leave request not found')
        return leave_request

    @staticmethod
    @transaction.atomic
    def cancel(user, request_id) -> LeaveRequest:
        leave_request = LeaveRequestService.my_request(user, request_id)
        if leave_request.status != LeaveRequestStatus.PENDING:
            raise ValidationError('Only pending requests can be cancelled')

        leave_request.status = LeaveRequestStatus.CANCELLED
        leave_request.updated_by = user
        leave_request.save(update_fields=['status', 'updated_by', 'updated_at'])

        logger.info("Leave request %s cancelled by %s", leave_request.pk, user.email)
        return leave_request

    # Reviewer side

    @staticmethod
    def list_requests(user, filters: dict = None) -> QuerySet:
        """
        Leave requests of the caller's company.

        Args:
            filters: status, employee_id, department_id, leave_type_id,
                date_from, date_to
        """
        filters = filters or {}
        company = require_company(user)

        queryset = LeaveRequestService._with_relations(LeaveRequest.objects.for_company(company.id))

        lookups = {
            'status': 'status',
            'employee_id': 'employee_id',
            'department_id': 'employee__department_id',
            'leave_type_id': 'leave_type_id',
        }
        for key, lookup in lookups.items():
            if filters.get(key):
                queryset = queryset.filter(**{lookup: filters[key]})

        if filters.get('date_from'):
            queryset = queryset.filter(start_date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(end_date__lte=filters['date_to'])
        return queryset

    @staticmethod
    def get_request(user, request_id) -> LeaveRequest:
        require_company(user)
        try:
            leave_request = LeaveRequestService._with_relations(LeaveRequest.objects).get(pk=request_id)
        except LeaveRequest.DoesNotExist:
            raise Http404('Leave request not found')

        ensure_same_company(user, leave_request, 'leave requests')
        return leave_request

    @staticmethod
    def _pending_for_review(user, request_id, action) -> LeaveRequest:
        leave_request = LeaveRequestService.get_request(user, request_id)
        if leave_request.status != LeaveRequestStatus.PENDING:
            raise ValidationError(f'Only pending requests can be {action}')
        return leave_request

    @staticmethod
    def _apply_to_attendance(leave_request, reviewer):
        """
        Mark every leave date ON_LEAVE in attendance.

        Raises:
            ValidationError: If the employee already checked in or out on one
                of the dates
        """
        dates = build_leave_dates(leave_request.start_date, leave_request.end_date)
        employee = leave_request.employee

        existing = {
            day.date: day for day in
            AttendanceDay.objects.select_for_update().filter(employee=employee, date__in=dates)
        }
        if any(day.check_in_time or day.check_out_time for day in existing.values()):
            raise ValidationError(
                'Attendance already exists for one or more leave dates. Please regularize attendance first.'
            )

        notes = f'Leave: {leave_request.leave_type.name}'
        for leave_date in dates:
            day = existing.get(leave_date) or AttendanceDay(
                company_id=leave_request.company_id,
                employee=employee,
                date=leave_date,
                created_by=reviewer,
            )
            day.work_shift_id = employee.work_shift_id
            day.status = AttendanceStatus.ON_LEAVE
            day.late_minutes = 0
            day.total_work_minutes = 0
            day.overtime_minutes = 0
            day.source = AttendanceSource.ADMIN
            day.notes = notes
            day.updated_by = reviewer
            day.save()

    @staticmethod
    @transaction.atomic
    def approve(user, dto: LeaveReviewDTO) -> LeaveRequest:
        leave_request = LeaveRequestService._pending_for_review(user, dto.request_id, 'approved')

        LeaveRequestService._ensure_no_overlap(
            leave_request.employee_id,
            leave_request.start_date,
            leave_request.end_date,
            exclude_pk=leave_request.pk
        )
        LeaveRequestService._apply_to_attendance(leave_request, user)

        leave_request.status = LeaveRequestStatus.APPROVED
        leave_request.reviewed_by = user
        leave_request.reviewed_at = timezone.now()
        leave_request.review_note = dto.review_note or ''
        leave_request.updated_by = user
        leave_request.save()

        logger.info("Leave request %s approved by %s", leave_request.pk, user.email)
        return leave_request

    @staticmethod
    @transaction.atomic
    def reject(user, dto: LeaveReviewDTO) -> LeaveRequest:
        leave_request = LeaveRequestService._pending_for_review(user, dto.request_id, 'rejected')

        leave_request.status = LeaveRequestStatus.REJECTED
        leave_request.reviewed_by = user
        leave_request.reviewed_at = timezone.now()
        leave_request.review_note = dto.review_note or ''
        leave_request.updated_by = user
        leave_request.save()

        logger.info("Leave request %s rejected by %s", leave_request.pk, user.email)
        return leave_request
