"""
Attendance Service - Business Logic Layer

Handles:
- Check-in / check-out for the signed-in employee (or on behalf of one)
- Manual entry and correction by HR admins
- Listing, CSV / Excel export and bulk import
- Marking absentees for a date
- Applying approved attendance regularizations

Metric computation lives in HR.attendance.metrics.
"""
import logging
import re
from datetime import date, datetime, time, timedelta

from dateutil import parser as date_parser
from django.core.exceptions import PermissionDenied, ValidationError
from django.db import transaction
from django.db.models import QuerySet
from django.http import Http404
from django.utils import timezone

from core.companies.models import Company, CompanyStatus
from core.base.tenancy import require_company
from core.user_accounts.models import COMPANY_LEVEL_ROLES
from HR.attendance import excel_utils
from HR.attendance.dtos import CheckInOutDTO, ManualAttendanceDTO, AttendanceUpdateDTO
from HR.attendance.metrics import (
    attendance_setting,
    compute_metrics,
    is_weekly_off,
    resolve_shift_window,
    to_local,
)
from HR.attendance.models import (
    AttendanceDay,
    AttendanceLog,
    AttendanceSource,
    AttendanceStatus,
    LogMethod,
    LogType,
)
from HR.person.models import Employee
from HR.work_structures.models import WorkShift

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ('csv', 'xlsx')
PLAIN_TIME_PATTERN = re.compile(r'^\d{1,2}:\d{2}(:\d{2})?\s*([AaPp][Mm])?$')


def _local_now(now=None) -> datetime:
    return to_local(now or timezone.now())


def _aware(value: datetime) -> datetime:
    return value if timezone.is_aware(value) else timezone.make_aware(value)


def _parse_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value or '').strip()
    if not text:
        raise ValueError('Date is required')
    return date_parser.parse(text).date()


def _is_plain_time(value) -> bool:
    if isinstance(value, time):
        return True
    return isinstance(value, str) and bool(PLAIN_TIME_PATTERN.match(value.strip()))


def _parse_moment(value, on_date: date):
    """
    Parse an imported time cell.

    Plain times ('09:05', '9:05 AM') are placed on on_date; full timestamps
    keep their own date.
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, time):
        return _aware(datetime.combine(on_date, value))
    text = str(value).strip()
    if not text:
        return None
    return _aware(date_parser.parse(text, default=datetime.combine(on_date, time(0, 0))))


class AttendanceService:
    """Service layer for attendance days and logs"""

    # Lookups

    @staticmethod
    def resolve_target_employee(user, employee_id=None) -> Employee:
        """
        Employee an attendance action applies to.

        Company-level users may act for any employee of their company by
        passing employee_id; everyone else acts for their own record.

        Raises:
            Http404: If the employee (or the caller's own record) is missing
            PermissionDenied: If the employee belongs to another company
        """
        if employee_id and user.role in COMPANY_LEVEL_ROLES:
            try:
                employee = Employee.objects.with_relations().get(pk=employee_id)
            except Employee.DoesNotExist:
                raise Http404(f'Employee with ID "{employee_id}" not found')
            if employee.company_id != user.company_id:
                raise PermissionDenied('You can only manage attendance for employees in your own company')
            return employee

        try:
            return Employee.objects.with_relations().get(user=user)
        except Employee.DoesNotExist:
            raise Http404('Employee profile not found for current user')

    @staticmethod
    def _company_employee(user, employee_id) -> Employee:
        company = require_company(user)
        try:
            employee = Employee.objects.with_relations().get(pk=employee_id)
        except Employee.DoesNotExist:
            raise Http404(f'Employee with ID "{employee_id}" not found')
        if employee.company_id != company.id:
            raise PermissionDenied('You can only manage attendance for employees in your own company')
        return employee

    @staticmethod
    def _company_shift(company, shift_id) -> WorkShift:
        try:
            shift = WorkShift.objects.get(pk=shift_id)
        except WorkShift.DoesNotExist:
            raise Http404(f'Work shift with ID "{shift_id}" not found')
        if shift.company_id != company.id:
            raise PermissionDenied('Work shift does not belong to your company')
        return shift

    @staticmethod
    def _log(day, moment, log_type, method, ip_address=None, user_agent=''):
        return AttendanceLog.objects.create(
            company_id=day.company_id,
            employee_id=day.employee_id,
            attendance_day=day,
            timestamp=moment,
            type=log_type,
            method=method,
            ip_address=ip_address or None,
            user_agent=(user_agent or '')[:500],
        )

    @staticmethod
    def _apply_metrics(day, shift, status_override=None):
        metrics = compute_metrics(day.check_in_time, day.check_out_time, shift)
        day.status = status_override or metrics.status
        day.late_minutes = metrics.late_minutes
        day.total_work_minutes = metrics.total_work_minutes
        day.overtime_minutes = metrics.overtime_minutes

    # Check-in / check-out

    @staticmethod
    @transaction.atomic
    def check_in(user, dto: CheckInOutDTO, now=None) -> AttendanceDay:
        """
        Record a check-in.

        The attendance date is the date the current shift window started, so
        checking in after midnight on an overnight shift counts for the
        previous day.

        Raises:
            ValidationError: No shift, too early, or already checked in
        """
        employee = AttendanceService.resolve_target_employee(user, dto.employee_id)
        shift = employee.work_shift
        if shift is None:
            raise ValidationError('Employee does not have a work shift assigned')

        now = now or timezone.now()
        local_now = _local_now(now)
        window = resolve_shift_window(local_now, shift.start_time, shift.end_time)

        early = attendance_setting('EARLY_CHECK_IN_MINUTES')
        if local_now < window.start - timedelta(minutes=early):
            raise ValidationError(f'Check-in is allowed only within {early} minutes before shift start')

        attendance_date = window.start.date()
        day = AttendanceDay.objects.select_for_update().filter(employee=employee, date=attendance_date).first()
        if day is not None and day.check_in_time:
            raise ValidationError('Employee has already checked in for today')

        is_self = employee.user_id == user.id
        if day is None:
            day = AttendanceDay(company_id=employee.company_id, employee=employee, date=attendance_date, created_by=user)

        day.work_shift = shift
        day.check_in_time = now
        day.check_out_time = None
        day.source = AttendanceSource.SELF if is_self else AttendanceSource.ADMIN
        day.updated_by = user
        AttendanceService._apply_metrics(day, shift)
        day.save()

        AttendanceService._log(
            day, now, LogType.CHECK_IN,
            LogMethod.WEB if is_self else LogMethod.ADMIN,
            dto.ip_address, dto.user_agent
        )
        logger.info("Check-in recorded for %s on %s by %s", employee.employee_code, attendance_date, user.email)
        return day

    @staticmethod
    @transaction.atomic
    def check_out(user, dto: CheckInOutDTO, now=None) -> AttendanceDay:
        """
        Record a check-out and recompute the day's metrics.

        When the current shift window has no open day, yesterday's open day
        is closed instead (overnight shifts checked out after the window).

        The shift stored on the day wins over the employee's current shift.

        Raises:
            ValidationError: No check-in yet, already checked out, or no shift
                on either the day or the employee
        """
        employee = AttendanceService.resolve_target_employee(user, dto.employee_id)
        shift = employee.work_shift

        now = now or timezone.now()
        local_now = _local_now(now)
        if shift is not None:
            attendance_date = resolve_shift_window(local_now, shift.start_time, shift.end_time).start.date()
        else:
            attendance_date = local_now.date()

        days = AttendanceDay.objects.select_for_update().filter(employee=employee)
        day = days.filter(date=attendance_date).first()

        if day is None or not day.check_in_time or day.check_out_time:
            previous = days.filter(
                date=attendance_date - timedelta(days=1),
                check_in_time__isnull=False,
                check_out_time__isnull=True
            ).first()
            if previous is not None:
                day = previous

        if day is None or not day.check_in_time:
            raise ValidationError('Cannot check-out before check-in for today')
        if day.check_out_time:
            raise ValidationError('Employee has already checked out for today')

        shift = day.work_shift or shift
        if shift is None:
            raise ValidationError('Employee does not have a work shift assigned')

        is_self = employee.user_id == user.id
        day.check_out_time = now
        day.updated_by = user
        AttendanceService._apply_metrics(day, shift)
        day.save()

        AttendanceService._log(
            day, now, LogType.CHECK_OUT,
            LogMethod.WEB if is_self else LogMethod.ADMIN,
            dto.ip_address, dto.user_agent
        )
        logger.info("Check-out recorded for %s on %s by %s", employee.employee_code, day.date, user.email)
        return day

    # Queries

    @staticmethod
    def _filter_dates(queryset, filters):
        if filters.get('date_from'):
            queryset = queryset.filter(date__gte=filters['date_from'])
        if filters.get('date_to'):
            queryset = queryset.filter(date__lte=filters['date_to'])
        return queryset

    @staticmethod
    def my_attendance(user, filters: dict = None) -> QuerySet:
        """
        Attendance days of the signed-in user's employee record.

        Args:
            filters: date_from / date_to (inclusive)
        """
        filters = filters or {}
        employee = AttendanceService.resolve_target_employee(user)
        queryset = AttendanceDay.objects.filter(employee=employee).select_related('employee', 'work_shift')
        return AttendanceService._filter_dates(queryset, filters)

    @staticmethod
    def list_attendance(user, filters: dict = None) -> QuerySet:
        """
        Attendance days of the caller's company.

        Args:
            filters: Dictionary of filters
                - employee_id / department_id / designation_id / shift_id
                - status
                - date_from / date_to
        """
        filters = filters or {}
        company = require_company(user)

        queryset = AttendanceDay.objects.for_company(company.id).select_related('employee', 'work_shift')

        lookups = {
            'employee_id': 'employee_id',
            'department_id': 'employee__department_id',
            'designation_id': 'employee__designation_id',
            'shift_id': 'work_shift_id',
            'status': 'status',
        }
        for key, lookup in lookups.items():
            if filters.get(key):
                queryset = queryset.filter(**{lookup: filters[key]})

        return AttendanceService._filter_dates(queryset, filters)

    @staticmethod
    def get_attendance(user, attendance_id) -> AttendanceDay:
        company = require_company(user)
        try:
            day = AttendanceDay.objects.select_related('employee', 'work_shift').get(pk=attendance_id)
        except AttendanceDay.DoesNotExist:
            raise Http404(f'Attendance record with ID "{attendance_id}" not found')

        if day.company_id != company.id:
            raise PermissionDenied('You can only access attendance from your own company')
        return day

    # Manual entry

    @staticmethod
    def _validate_times(check_in, check_out):
        if check_out and not check_in:
            raise ValidationError({'check_out_time': 'Check-out time requires a check-in time'})
        if check_in and check_out and check_out <= check_in:
            raise ValidationError({'check_out_time': 'Check-out time must be after check-in time'})

    @staticmethod
    @transaction.atomic
    def create_manual(user, dto: ManualAttendanceDTO) -> AttendanceDay:
        """
        Create or overwrite the attendance day of an employee.

        The shift defaults to the employee's current shift. status, when
        given, overrides the computed one.
        """
        employee = AttendanceService._company_employee(user, dto.employee_id)
        shift = (
            AttendanceService._company_shift(employee.company, dto.shift_id)
            if dto.shift_id else employee.work_shift
        )
        if shift is None:
            raise ValidationError('Employee does not have a work shift assigned')
        AttendanceService._validate_times(dto.check_in_time, dto.check_out_time)

        day, created = AttendanceDay.objects.select_for_update().get_or_create(
            employee=employee,
            date=dto.date,
            defaults={'company_id': employee.company_id, 'created_by': user}
        )
        day.work_shift = shift
        day.check_in_time = dto.check_in_time
        day.check_out_time = dto.check_out_time
        day.source = AttendanceSource.ADMIN
        day.updated_by = user
        if dto.notes is not None:
            day.notes = dto.notes
        AttendanceService._apply_metrics(day, shift, dto.status)
        day.save()

        if dto.check_in_time:
            AttendanceService._log(day, dto.check_in_time, LogType.CHECK_IN, LogMethod.ADMIN)
        if dto.check_out_time:
            AttendanceService._log(day, dto.check_out_time, LogType.CHECK_OUT, LogMethod.ADMIN)

        logger.info(
            "Attendance for %s on %s %s manually by %s",
            employee.employee_code, dto.date, 'created' if created else 'overwritten', user.email
        )
        return day

    @staticmethod
    @transaction.atomic
    def update_attendance(user, dto: AttendanceUpdateDTO) -> AttendanceDay:
        day = AttendanceService.get_attendance(user, dto.attendance_id)

        check_in = dto.check_in_time or day.check_in_time
        check_out = dto.check_out_time or day.check_out_time
        AttendanceService._validate_times(check_in, check_out)

        day.check_in_time = check_in
        day.check_out_time = check_out
        if dto.notes is not None:
            day.notes = dto.notes
        day.source = AttendanceSource.ADMIN
        day.updated_by = user
        AttendanceService._apply_metrics(day, day.work_shift or day.employee.work_shift, dto.status)
        day.save()

        logger.info("Attendance %s updated by %s", day.pk, user.email)
        return day

    # Regularization

    @staticmethod
    def snapshot(day) -> dict:
        """JSON-safe copy of the fields a regularization can change."""
        if day is None:
            return None
        return {
            'check_in_time': day.check_in_time.isoformat() if day.check_in_time else None,
            'check_out_time': day.check_out_time.isoformat() if day.check_out_time else None,
            'status': day.status,
            'total_work_minutes': day.total_work_minutes,
            'late_minutes': day.late_minutes,
            'overtime_minutes': day.overtime_minutes,
        }

    @staticmethod
    def apply_regularization(user, employee, on_date: date, check_in: time = None, check_out: time = None):
        """
        Write approved times onto the employee's day and recompute metrics.

        A time left as None keeps the day's current value. On an overnight
        shift a check-out at or before the check-in lands on the next day.

        Returns:
            tuple: (day, before_snapshot, after_snapshot)

        Raises:
            ValidationError: No shift on the day or employee, or the resulting
                check-out is not after the check-in
        """
        day = AttendanceDay.objects.select_for_update().filter(employee=employee, date=on_date).first()
        before = AttendanceService.snapshot(day)
        if day is None:
            day = AttendanceDay(company_id=employee.company_id, employee=employee, date=on_date, created_by=user)

        shift = day.work_shift or employee.work_shift
        if shift is None:
            raise ValidationError('Employee does not have a work shift assigned')

        check_in_time = _aware(datetime.combine(on_date, check_in)) if check_in else day.check_in_time
        check_out_time = _aware(datetime.combine(on_date, check_out)) if check_out else day.check_out_time
        if (check_in_time and check_out_time and check_out_time <= check_in_time
                and check_out and shift.end_time <= shift.start_time):
            check_out_time += timedelta(days=1)
        AttendanceService._validate_times(check_in_time, check_out_time)

        day.work_shift = shift
        day.check_in_time = check_in_time
        day.check_out_time = check_out_time
        day.source = AttendanceSource.ADMIN
        day.updated_by = user
        AttendanceService._apply_metrics(day, shift)
        day.save()

        if check_in:
            AttendanceService._log(day, check_in_time, LogType.CHECK_IN, LogMethod.ADMIN)
        if check_out:
            AttendanceService._log(day, check_out_time, LogType.CHECK_OUT, LogMethod.ADMIN)

        logger.info("Regularized attendance for %s on %s by %s", employee.employee_code, on_date, user.email)
        return day, before, AttendanceService.snapshot(day)

    # Export / import

    @staticmethod
    def export(user, filters: dict = None, file_format='csv'):
        """
        Export the filtered attendance list.

        Returns:
            HttpResponse with a CSV or Excel attachment

        Raises:
            ValidationError: For an unknown file_format
        """
        file_format = (file_format or 'csv').lower()
        if file_format not in EXPORT_FORMATS:
            raise ValidationError(f'Unsupported export format "{file_format}". Use csv or xlsx')

        days = AttendanceService.list_attendance(user, filters).order_by('date', 'employee__employee_code')
        filename = f'attendance_export_{timezone.localdate():%Y%m%d}'

        if file_format == 'xlsx':
            return excel_utils.export_to_excel(days, filename)
        return excel_utils.export_to_csv(days, filename)

    @staticmethod
    def _import_row(user, company, record: dict) -> AttendanceDay:
        code = str(record.get('employeecode') or '').strip()
        email = str(record.get('employeeemail') or '').strip()

        employees = Employee.objects.for_company(company.id).select_related('work_shift')
        if code:
            employee = employees.filter(employee_code__iexact=code).first()
        elif email:
            employee = employees.filter(user__email__iexact=email).first()
        else:
            raise ValueError('employee_code or employee_email is required')
        if employee is None:
            raise ValueError(f'Employee "{code or email}" not found in your company')

        shift = employee.work_shift
        shift_name = str(record.get('shiftname') or '').strip()
        if shift_name:
            shift = WorkShift.objects.for_company(company.id).filter(name__iexact=shift_name).first() or shift
        if shift is None:
            raise ValidationError('Employee does not have a work shift assigned')

        row_date = _parse_date(record.get('date'))
        check_in = _parse_moment(record.get('checkintime'), row_date)
        check_out = _parse_moment(record.get('checkouttime'), row_date)

        # Overnight shift: a bare check-out time at or before check-in is on the next day
        if (check_in and check_out and check_out <= check_in
                and shift.end_time <= shift.start_time
                and _is_plain_time(record.get('checkouttime'))):
            check_out += timedelta(days=1)
        AttendanceService._validate_times(check_in, check_out)

        day, _ = AttendanceDay.objects.get_or_create(
            employee=employee,
            date=row_date,
            defaults={'company_id': company.id, 'created_by': user}
        )
        day.work_shift = shift
        day.check_in_time = check_in
        day.check_out_time = check_out
        day.source = AttendanceSource.IMPORT
        day.updated_by = user
        notes = record.get('notes')
        if notes not in (None, ''):
            day.notes = str(notes)
        AttendanceService._apply_metrics(day, shift)
        day.save()

        if check_in:
            AttendanceService._log(day, check_in, LogType.CHECK_IN, LogMethod.IMPORT)
        if check_out:
            AttendanceService._log(day, check_out, LogType.CHECK_OUT, LogMethod.IMPORT)
        return day

    @staticmethod
    def import_file(user, uploaded_file) -> dict:
        """
        Bulk import attendance from a CSV or Excel file.

        Each row is imported in its own savepoint; a failing row is reported
        and does not affect the others.

        Returns:
            {'total', 'success_count', 'fail_count', 'errors': [{'row', 'message'}]}

        Raises:
            ValidationError: Unreadable file or missing required columns
        """
        company = require_company(user)
        headers, rows = excel_utils.read_table(uploaded_file)

        summary = {'total': len(rows), 'success_count': 0, 'fail_count': 0, 'errors': []}
        if not rows:
            summary['message'] = 'No data rows found'
            return summary

        if 'date' not in headers:
            raise ValidationError('Missing required column: date')
        if 'employeecode' not in headers and 'employeeemail' not in headers:
            raise ValidationError('File must contain an employee_code or employee_email column')

        for line_number, values in rows:
            record = dict(zip(headers, values))
            try:
                with transaction.atomic():
                    AttendanceService._import_row(user, company, record)
                summary['success_count'] += 1
            except ValidationError as e:
                summary['fail_count'] += 1
                summary['errors'].append({'row': line_number, 'message': ' '.join(e.messages)})
            except (ValueError, OverflowError, Http404, PermissionDenied) as e:
                summary['fail_count'] += 1
                summary['errors'].append({'row': line_number, 'message': str(e)})

        logger.info(
            "Attendance import for %s by %s: %s rows, %s imported, %s failed",
            company.name, user.email, summary['total'], summary['success_count'], summary['fail_count']
        )
        return summary

    # Absentees

    @staticmethod
    def _mark_absents_for_company(company, target_date: date, actor=None) -> int:
        recorded = AttendanceDay.objects.filter(company=company, date=target_date).values('employee_id')
        employees = (
            Employee.objects.for_company(company.id)
            .active()
            .filter(join_date__lte=target_date)
            .exclude(id__in=recorded)
        )

        absences = [
            AttendanceDay(
                company=company,
                employee=employee,
                work_shift_id=employee.work_shift_id,
                date=target_date,
                status=AttendanceStatus.ABSENT,
                source=AttendanceSource.ADMIN,
                created_by=actor,
                updated_by=actor,
            )
            for employee in employees
        ]
        AttendanceDay.objects.bulk_create(absences, ignore_conflicts=True)
        return len(absences)

    @staticmethod
    @transaction.atomic
    def mark_absents(user, target_date: date = None) -> dict:
        """
        Create ABSENT days for active employees with no record on target_date
        (today by default). Weekly off days are skipped.
        """
        company = require_company(user)
        target_date = target_date or timezone.localdate()

        if is_weekly_off(target_date):
            return {'date': target_date.isoformat(), 'created': 0, 'skipped': True}

        created = AttendanceService._mark_absents_for_company(company, target_date, actor=user)
        logger.info("Marked %s absentees for %s on %s", created, company.name, target_date)
        return {'date': target_date.isoformat(), 'created': created, 'skipped': False}

    @staticmethod
    @transaction.atomic
    def mark_absents_for_all_companies(target_date: date = None) -> int:
        """Scheduled variant of mark_absents across every active company."""
        target_date = target_date or timezone.localdate()
        if is_weekly_off(target_date):
            logger.info("Skipping absentee marking on weekly off %s", target_date)
            return 0

        total = 0
        for company in Company.objects.filter(status=CompanyStatus.ACTIVE):
            total += AttendanceService._mark_absents_for_company(company, target_date)

        logger.info("Marked %s absentees across all companies on %s", total, target_date)
        return total
