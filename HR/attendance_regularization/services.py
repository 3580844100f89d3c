"""
Attendance Regularization Service - Business Logic Layer

Handles:
- Filing a correction for a past attendance day (own, or on behalf of an
  employee for company-level users)
- Listing and cancelling own requests
- Review: list, approve (rewrites the attendance day) and reject
"""
import logging
from datetime import timedelta

from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.http import Http404
from django.utils import timezone

from core.base.exceptions import ConflictError
from core.base.tenancy import ensure_same_company, require_company
from core.user_accounts.models import COMPANY_LEVEL_ROLES
from HR.attendance.models import AttendanceDay
from HR.attendance.services import AttendanceService
from HR.attendance_regularization.dtos import RegularizationCreateDTO, RegularizationReviewDTO
from HR.attendance_regularization.models import (
    AttendanceRegularization,
    NEEDS_CHECK_IN,
    NEEDS_CHECK_OUT,
    RegularizationStatus,
)
from HR.person.models import Employee

logger = logging.getLogger(__name__)

MAX_PAST_DAYS = 30


class RegularizationService:
    """Service layer for attendance regularizations"""

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
                raise PermissionDenied('You cannot create regularizations for other employees')
            try:
                employee = Employee.objects.select_related('work_shift').get(pk=employee_id)
            except Employee.DoesNotExist:
                raise Http404(f'Employee with ID "{employee_id}" not found')
            ensure_same_company(user, employee, 'employees')
            return employee

        try:
            return Employee.objects.select_related('work_shift').get(user=user)
        except Employee.DoesNotExist:
            raise Http404('Employee profile not found for current user')

    @staticmethod
    def _validate_request(dto: RegularizationCreateDTO, employee: Employee):
        today = timezone.localdate()
        if dto.date > today:
            raise ValidationError('Cannot request regularization for a future date')
        if (today - dto.date).days > MAX_PAST_DAYS:
            raise ValidationError(f'Regularization allowed only within past {MAX_PAST_DAYS} days')

        if dto.request_type in NEEDS_CHECK_IN and not dto.requested_check_in_time:
            raise ValidationError({'requested_check_in_time': 'Requested check-in time is required for this request type'})
        if dto.request_type in NEEDS_CHECK_OUT and not dto.requested_check_out_time:
            raise ValidationError({'requested_check_out_time': 'Requested check-out time is required for this request type'})

        shift = employee.work_shift
        overnight = shift is not None and shift.end_time <= shift.start_time
        check_in, check_out = dto.requested_check_in_time, dto.requested_check_out_time
        if check_in and check_out and check_out <= check_in and not overnight:
            raise ValidationError('Check-out must be after check-in')

    @staticmethod
    def _with_relations(queryset):
        return queryset.select_related('employee', 'attendance_day', 'reviewed_by')

    # Requester side

    @staticmethod
    @transaction.atomic
    def create(user, dto: RegularizationCreateDTO) -> AttendanceRegularization:
        """
        File a PENDING regularization and keep a snapshot of the current day.

        Raises:
            ValidationError: Future or too old date, missing or inverted times
            ConflictError: A pending request already exists for the date
        """
        require_company(user)
        employee = RegularizationService._resolve_employee(user, dto.employee_id)
        RegularizationService._validate_request(dto, employee)

        pending = AttendanceRegularization.objects.filter(
            employee=employee, date=dto.date, status=RegularizationStatus.PENDING
        )
        if pending.exists():
            raise ConflictError('A pending regularization already exists for this date')

        day = AttendanceDay.objects.filter(employee=employee, date=dto.date).first()
        regularization = AttendanceRegularization.objects.create(
            company_id=employee.company_id,
            employee=employee,
            attendance_day=day,
            date=dto.date,
            request_type=dto.request_type,
            requested_check_in_time=dto.requested_check_in_time,
            requested_check_out_time=dto.requested_check_out_time,
            reason=dto.reason,
            before_snapshot=AttendanceService.snapshot(day),
            created_by=user,
            updated_by=user,
        )
        logger.info(
            "Regularization %s (%s) filed for %s on %s by %s",
            regularization.pk, dto.request_type, employee.employee_code, dto.date, user.email
        )
        return regularization

    @staticmethod
    def my_requests(user, filters: dict = None) -> QuerySet:
        """
        Args:
            filters: status, date_from, date_to (inclusive)
        """
        filters = filters or {}
        employee = RegularizationService._resolve_employee(user)

        queryset = RegularizationService._with_relations(
            AttendanceRegularization.objects.filter(employee=employee)
        )
        return RegularizationService._apply_filters(queryset, filters, ('status',))

    @staticmethod
    def my_request(user, regularization_id) -> AttendanceRegularization:
        employee = RegularizationService._resolve_employee(user)
        regularization = RegularizationService._with_relations(
            AttendanceRegularization.objects.filter(pk=regularization_id, employee=employee)
        ).first()
        if regularization is None:
            raise Http404('Regularization not found')
        return regularization

    @staticmethod
    @transaction.atomic
    def cancel(user, regularization_id) -> AttendanceRegularization:
        regularization = RegularizationService.my_request(user, regularization_id)
        if regularization.status != RegularizationStatus.PENDING:
            raise ValidationError('Only pending requests can be cancelled')

        regularization.status = RegularizationStatus.CANCELLED
        regularization.updated_by = user
        regularization.save(update_fields=['status', 'updated_by', 'updated_at'])

        logger.info("Regularization %s cancelled by %s", regularization.pk, user.email)
        return regularization

    # Reviewer side

    @staticmethod
    def _apply_filters(queryset, filters, keys):
        lookups = {
            'status': 'status',
            'employee_id': 'employee_id',
            'department_id': 'employee__department_id',
            'request_type': 'request_type',
        }
        for key in keys:
            if filters.get(key):
                queryset = queryset.filter(**{lookups[key]: filters[key]})

        if filters.get('date_from'):
            queryset = queryset.filter(date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(date__lte=filters['date_to'])
        return queryset

    @staticmethod
    def list_requests(user, filters: dict = None) -> QuerySet:
        """
        Regularizations of the caller's company.

        Args:
            filters: status, employee_id, department_id, request_type,
                date_from, date_to
        """
        filters = filters or {}
        company = require_company(user)

        queryset = RegularizationService._with_relations(
            AttendanceRegularization.objects.for_company(company.id)
        )
        return RegularizationService._apply_filters(
            queryset, filters, ('status', 'employee_id', 'department_id', 'request_type')
        )

    @staticmethod
    def get_request(user, regularization_id) -> AttendanceRegularization:
        require_company(user)
        try:
            regularization = RegularizationService._with_relations(
                AttendanceRegularization.objects
            ).get(pk=regularization_id)
        except AttendanceRegularization.DoesNotExist:
            raise Http404('Regularization not found')

        ensure_same_company(user, regularization, 'regularizations')
        return regularization

    @staticmethod
    def _pending_for_review(user, regularization_id, action) -> AttendanceRegularization:
        regularization = RegularizationService.get_request(user, regularization_id)
        if regularization.status != RegularizationStatus.PENDING:
            raise ValidationError(f'Only pending requests can be {action}')
        return regularization

    @staticmethod
    @transaction.atomic
    def approve(user, dto: RegularizationReviewDTO) -> AttendanceRegularization:
        """
        Apply the requested times to the attendance day and approve.

        Raises:
            ValidationError: Not pending, or the times cannot be applied
        """
        regularization = RegularizationService._pending_for_review(user, dto.regularization_id, 'approved')

        day, before, after = AttendanceService.apply_regularization(
            user,
            regularization.employee,
            regularization.date,
            check_in=regularization.requested_check_in_time,
            check_out=regularization.requested_check_out_time,
        )

        regularization.status = RegularizationStatus.APPROVED
        regularization.attendance_day = day
        regularization.before_snapshot = before
        regularization.after_snapshot = after
        regularization.reviewed_by = user
        regularization.reviewed_at = timezone.now()
        regularization.review_note = dto.review_note or ''
        regularization.updated_by = user
        regularization.save()

        logger.info("Regularization %s approved by %s", regularization.pk, user.email)
        return regularization

    @staticmethod
    @transaction.atomic
    def reject(user, dto: RegularizationReviewDTO) -> AttendanceRegularization:
        regularization = RegularizationService._pending_for_review(user, dto.regularization_id, 'rejected')

        regularization.status = RegularizationStatus.REJECTED
        regularization.reviewed_by = user
        regularization.reviewed_at = timezone.now()
        regularization.review_note = dto.review_note or ''
        regularization.updated_by = user
        regularization.save()

        logger.info("Regularization %s rejected by %s", regularization.pk, user.email)
        return regularization
