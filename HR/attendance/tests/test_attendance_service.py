from datetime import date, datetime, time
from io import BytesIO

from django.core.exceptions import PermissionDenied, ValidationError
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.utils import timezone
from openpyxl import Workbook

from HR.attendance.dtos import CheckInOutDTO, ManualAttendanceDTO
from HR.attendance.models import AttendanceDay, AttendanceLog, AttendanceSource, AttendanceStatus, LogMethod
from HR.attendance.services import AttendanceService
from core.base.test_utils import make_company, make_company_admin, make_employee, make_shift


def aware(day, hour, minute=0):
    return timezone.make_aware(datetime(2025, 1, day, hour, minute))


class CheckInOutTest(TestCase):

    def setUp(self):
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.shift = make_shift(self.company, 'Day', time(9, 0), time(17, 0))
        self.employee = make_employee(self.company, 'jane@acme.test', code='ACME001', work_shift=self.shift)
        self.user = self.employee.user

    def test_on_time_check_in(self):
        day = AttendanceService.check_in(self.user, CheckInOutDTO(ip_address='10.0.0.1'), now=aware(15, 9, 5))

        self.assertEqual(day.date, date(2025, 1, 15))
        self.assertEqual(day.status, AttendanceStatus.PRESENT)
        self.assertEqual(day.source, AttendanceSource.SELF)
        self.assertEqual(day.work_shift, self.shift)

        log = AttendanceLog.objects.get(attendance_day=day)
        self.assertEqual(log.method, LogMethod.WEB)
        self.assertEqual(log.ip_address, '10.0.0.1')

    def test_early_check_in_rejected(self):
        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 8, 0))
        self.assertIn('within 30 minutes before shift start', ctx.exception.messages[0])

    def test_duplicate_check_in_rejected(self):
        AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 0))
        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 30))
        self.assertEqual(ctx.exception.messages, ['Employee has already checked in for today'])

    def test_check_in_without_shift(self):
        self.employee.work_shift = None
        self.employee.save()

        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 0))
        self.assertEqual(ctx.exception.messages, ['Employee does not have a work shift assigned'])

    def test_check_out_computes_metrics(self):
        AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 40))
        day = AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(15, 18, 40))

        self.assertEqual(day.status, AttendanceStatus.LATE)
        self.assertEqual(day.late_minutes, 40)
        self.assertEqual(day.total_work_minutes, 540)
        self.assertEqual(day.overtime_minutes, 60)
        self.assertEqual(day.logs.count(), 2)

    def test_check_out_before_check_in(self):
        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(15, 17, 0))
        self.assertEqual(ctx.exception.messages, ['Cannot check-out before check-in for today'])

    def test_double_check_out(self):
        AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 0))
        AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(15, 17, 0))
        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(15, 17, 5))
        self.assertEqual(ctx.exception.messages, ['Employee has already checked out for today'])

    def test_admin_checks_in_on_behalf(self):
        dto = CheckInOutDTO(employee_id=self.employee.id)
        day = AttendanceService.check_in(self.admin, dto, now=aware(15, 9, 0))

        self.assertEqual(day.employee, self.employee)
        self.assertEqual(day.source, AttendanceSource.ADMIN)
        self.assertEqual(day.logs.get().method, LogMethod.ADMIN)

    def test_admin_cannot_act_for_other_company(self):
        other = make_company('Globex', code='GLX')
        stranger = make_employee(other, 'joe@globex.test', work_shift=make_shift(other))

        with self.assertRaises(PermissionDenied):
            AttendanceService.check_in(self.admin, CheckInOutDTO(employee_id=stranger.id), now=aware(15, 9, 0))

    def test_check_in_updates_absent_row(self):
        AttendanceDay.objects.create(
            company=self.company, employee=self.employee, date=date(2025, 1, 15),
            status=AttendanceStatus.ABSENT, source=AttendanceSource.ADMIN
        )
        day = AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 0))

        self.assertEqual(AttendanceDay.objects.filter(employee=self.employee).count(), 1)
        self.assertEqual(day.status, AttendanceStatus.PRESENT)

    def test_overnight_shift_after_midnight(self):
        night = make_shift(self.company, 'Night', time(22, 0), time(6, 0))
        self.employee.work_shift = night
        self.employee.save()

        day = AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(16, 1, 0))
        self.assertEqual(day.date, date(2025, 1, 15))
        self.assertEqual(day.late_minutes, 180)

        day = AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(16, 6, 30))
        self.assertEqual(day.date, date(2025, 1, 15))
        self.assertEqual(day.total_work_minutes, 330)

    def test_check_out_uses_shift_stored_on_day(self):
        AttendanceService.check_in(self.user, CheckInOutDTO(), now=aware(15, 9, 0))
        self.employee.work_shift = None
        self.employee.save()

        day = AttendanceService.check_out(self.user, CheckInOutDTO(), now=aware(15, 17, 0))

        self.assertEqual(day.work_shift, self.shift)
        self.assertEqual(day.status, AttendanceStatus.PRESENT)
        self.assertEqual(day.total_work_minutes, 480)


class ManualAttendanceTest(TestCase):

    def setUp(self):
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.shift = make_shift(self.company, 'Day', time(9, 0), time(17, 0))
        self.employee = make_employee(self.company, 'jane@acme.test', code='ACME001', work_shift=self.shift)

    def test_manual_entry_upserts(self):
        dto = ManualAttendanceDTO(
            employee_id=self.employee.id,
            date=date(2025, 1, 15),
            check_in_time=aware(15, 9, 0),
            check_out_time=aware(15, 17, 0),
        )
        first = AttendanceService.create_manual(self.admin, dto)
        self.assertEqual(first.status, AttendanceStatus.PRESENT)
        self.assertEqual(first.source, AttendanceSource.ADMIN)

        dto.status = AttendanceStatus.HALF_DAY
        dto.notes = 'Left early, approved'
        second = AttendanceService.create_manual(self.admin, dto)

        self.assertEqual(first.pk, second.pk)
        self.assertEqual(second.status, AttendanceStatus.HALF_DAY)
        self.assertEqual(second.notes, 'Left early, approved')

    def test_check_out_must_follow_check_in(self):
        dto = ManualAttendanceDTO(
            employee_id=self.employee.id,
            date=date(2025, 1, 15),
            check_in_time=aware(15, 17, 0),
            check_out_time=aware(15, 9, 0),
        )
        with self.assertRaises(ValidationError):
            AttendanceService.create_manual(self.admin, dto)

    def test_employee_without_shift_rejected(self):
        self.employee.work_shift = None
        self.employee.save()
        dto = ManualAttendanceDTO(
            employee_id=self.employee.id,
            date=date(2025, 1, 15),
            check_in_time=aware(15, 9, 0),
            check_out_time=aware(15, 17, 0),
        )
        with self.assertRaises(ValidationError) as ctx:
            AttendanceService.create_manual(self.admin, dto)
        self.assertEqual(ctx.exception.messages, ['Employee does not have a work shift assigned'])
        self.assertFalse(AttendanceDay.objects.exists())

    def test_explicit_shift_covers_employee_without_one(self):
        self.employee.work_shift = None
        self.employee.save()
        dto = ManualAttendanceDTO(
            employee_id=self.employee.id,
            date=date(2025, 1, 15),
            check_in_time=aware(15, 9, 0),
            check_out_time=aware(15, 17, 0),
            shift_id=self.shift.id,
        )
        day = AttendanceService.create_manual(self.admin, dto)
        self.assertEqual(day.work_shift, self.shift)
        self.assertEqual(day.status, AttendanceStatus.PRESENT)


class MarkAbsentsTest(TestCase):

    def setUp(self):
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.present = make_employee(self.company, 'a@acme.test')
        self.missing = make_employee(self.company, 'b@acme.test')
        AttendanceDay.objects.create(
            company=self.company, employee=self.present, date=date(2025, 1, 15),
            check_in_time=aware(15, 9, 0), status=AttendanceStatus.PRESENT
        )

    def test_marks_only_employees_without_record(self):
        result = AttendanceService.mark_absents(self.admin, date(2025, 1, 15))

        self.assertEqual(result['created'], 1)
        absent = AttendanceDay.objects.get(employee=self.missing, date=date(2025, 1, 15))
        self.assertEqual(absent.status, AttendanceStatus.ABSENT)
        self.assertEqual(absent.source, AttendanceSource.ADMIN)

    def test_running_twice_creates_nothing_new(self):
        AttendanceService.mark_absents(self.admin, date(2025, 1, 15))
        result = AttendanceService.mark_absents(self.admin, date(2025, 1, 15))
        self.assertEqual(result['created'], 0)

    def test_weekly_off_is_skipped(self):
        result = AttendanceService.mark_absents(self.admin, date(2025, 1, 18))

        self.assertTrue(result['skipped'])
        self.assertFalse(AttendanceDay.objects.filter(date=date(2025, 1, 18)).exists())

    def test_all_companies(self):
        other = make_company('Globex', code='GLX')
        make_employee(other, 'joe@globex.test')

        self.assertEqual(AttendanceService.mark_absents_for_all_companies(date(2025, 1, 15)), 2)


class ImportAttendanceTest(TestCase):

    def setUp(self):
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.shift = make_shift(self.company, 'Day', time(9, 0), time(17, 0))
        self.employee = make_employee(self.company, 'jane@acme.test', code='ACME001', work_shift=self.shift)

    def _upload(self, text, name='attendance.csv'):
        return SimpleUploadedFile(name, text.encode('utf-8'), content_type='text/csv')

    def test_import_reports_row_errors(self):
        upload = self._upload(
            'Employee Code,Date,Check In Time,Check Out Time,Notes\n'
            'ACME001,2025-01-15,09:00,17:30,imported\n'
            'NOPE,2025-01-15,09:00,17:00,\n'
            'ACME001,2025-01-16,17:00,09:00,\n'
        )
        summary = AttendanceService.import_file(self.admin, upload)

        self.assertEqual(summary['total'], 3)
        self.assertEqual(summary['success_count'], 1)
        self.assertEqual(summary['fail_count'], 2)
        self.assertEqual([error['row'] for error in summary['errors']], [3, 4])

        day = AttendanceDay.objects.get(employee=self.employee, date=date(2025, 1, 15))
        self.assertEqual(day.source, AttendanceSource.IMPORT)
        self.assertEqual(day.total_work_minutes, 510)
        self.assertEqual(day.overtime_minutes, 30)
        self.assertEqual(day.notes, 'imported')
        self.assertEqual(day.logs.count(), 2)
        self.assertFalse(AttendanceDay.objects.filter(date=date(2025, 1, 16)).exists())

    def test_import_by_email(self):
        upload = self._upload('employee_email,date,check_in_time\njane@acme.test,2025-01-15,9:50 AM\n')
        summary = AttendanceService.import_file(self.admin, upload)

        self.assertEqual(summary['success_count'], 1)
        day = AttendanceDay.objects.get(employee=self.employee)
        self.assertEqual(day.status, AttendanceStatus.LATE)
        self.assertEqual(day.late_minutes, 50)

    def test_missing_date_column(self):
        with self.assertRaises(ValidationError):
            AttendanceService.import_file(self.admin, self._upload('employee_code\nACME001\n'))

    def test_missing_employee_columns(self):
        with self.assertRaises(ValidationError):
            AttendanceService.import_file(self.admin, self._upload('date\n2025-01-15\n'))

    def test_header_only_file(self):
        summary = AttendanceService.import_file(self.admin, self._upload('employee_code,date\n'))
        self.assertEqual(summary['total'], 0)
        self.assertEqual(summary['message'], 'No data rows found')

    def test_unsupported_extension(self):
        with self.assertRaises(ValidationError):
            AttendanceService.import_file(self.admin, self._upload('x', name='attendance.txt'))

    def test_overnight_row_checks_out_next_day(self):
        night = make_shift(self.company, 'Night', time(22, 0), time(6, 0))
        make_employee(self.company, 'sam@acme.test', code='ACME002', work_shift=night)

        summary = AttendanceService.import_file(
            self.admin,
            self._upload('employee_code,date,check_in_time,check_out_time\nACME002,2025-01-15,22:00,06:00\n')
        )

        self.assertEqual(summary['success_count'], 1)
        day = AttendanceDay.objects.get(employee__employee_code='ACME002')
        self.assertEqual(day.date, date(2025, 1, 15))
        self.assertEqual(day.check_out_time, aware(16, 6, 0))
        self.assertEqual(day.total_work_minutes, 480)
        self.assertEqual(day.status, AttendanceStatus.PRESENT)

    def test_row_for_employee_without_shift_fails(self):
        make_employee(self.company, 'sam@acme.test', code='ACME002')

        summary = AttendanceService.import_file(
            self.admin,
            self._upload('employee_code,date,check_in_time,check_out_time\nACME002,2025-01-15,09:00,17:00\n')
        )

        self.assertEqual(summary['fail_count'], 1)
        self.assertEqual(summary['errors'], [{'row': 2, 'message': 'Employee does not have a work shift assigned'}])
        self.assertFalse(AttendanceDay.objects.exists())

    def test_import_xlsx(self):
        wb = Workbook()
        ws = wb.active
        ws.append(['Employee Code', 'Date', 'Check In Time', 'Check Out Time', 'Shift Name'])
        ws.append(['ACME001', '2025-01-15', '09:40', '17:00', None])
        ws.append([None, None, None, None, None])
        ws.append(['ACME001', date(2025, 1, 16), time(9, 0), time(17, 0), 'day'])
        output = BytesIO()
        wb.save(output)
        upload = SimpleUploadedFile('attendance.xlsx', output.getvalue())

        summary = AttendanceService.import_file(self.admin, upload)

        self.assertEqual(summary['total'], 2)
        self.assertEqual(summary['success_count'], 2)
        late = AttendanceDay.objects.get(employee=self.employee, date=date(2025, 1, 15))
        self.assertEqual(late.status, AttendanceStatus.LATE)
        self.assertEqual(late.late_minutes, 40)
        on_time = AttendanceDay.objects.get(employee=self.employee, date=date(2025, 1, 16))
        self.assertEqual(on_time.total_work_minutes, 480)
