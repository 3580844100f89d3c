"""
API Tests for Attendance endpoints.
"""
from datetime import date, datetime, time
from io import BytesIO
from unittest import mock

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import TestCase
from django.utils import timezone
from openpyxl import load_workbook
from rest_framework import status
from rest_framework.test import APIClient

from HR.attendance.models import AttendanceDay, AttendanceStatus
from core.base.test_utils import make_company, make_company_admin, make_employee, make_shift, make_user
from core.user_accounts.models import UserRole

BASE_URL = '/hr/attendance/'


def aware(day, hour, minute=0):
    return timezone.make_aware(datetime(2025, 1, day, hour, minute))


class AttendanceAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.shift = make_shift(self.company, 'Day', time(9, 0), time(17, 0))
        self.employee = make_employee(self.company, 'jane@acme.test', code='ACME001', work_shift=self.shift)

    def _record(self, employee=None, day=15, **extra):
        values = {
            'company': self.company,
            'employee': employee or self.employee,
            'work_shift': self.shift,
            'date': date(2025, 1, day),
            'check_in_time': aware(day, 9, 0),
            'status': AttendanceStatus.PRESENT,
        }
        values.update(extra)
        return AttendanceDay.objects.create(**values)

    def test_employee_check_in_and_out(self):
        self.client.force_authenticate(user=self.employee.user)

        with mock.patch('django.utils.timezone.now', return_value=aware(15, 9, 10)):
            response = self.client.post(f'{BASE_URL}check-in/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], AttendanceStatus.PRESENT)
        self.assertEqual(response.data['data']['employee']['employee_code'], 'ACME001')

        with mock.patch('django.utils.timezone.now', return_value=aware(15, 17, 10)):
            response = self.client.post(f'{BASE_URL}check-out/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['total_work_minutes'], 480)

    def test_early_check_in_returns_400(self):
        self.client.force_authenticate(user=self.employee.user)

        with mock.patch('django.utils.timezone.now', return_value=aware(15, 7, 0)):
            response = self.client.post(f'{BASE_URL}check-in/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_user_without_employee_record(self):
        manager = make_user('boss@acme.test', role=UserRole.MANAGER, company=self.company)
        self.client.force_authenticate(user=manager)

        response = self.client.post(f'{BASE_URL}check-in/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_my_attendance(self):
        self._record()
        other = make_employee(self.company, 'joe@acme.test', work_shift=self.shift)
        self._record(employee=other)
        self.client.force_authenticate(user=self.employee.user)

        response = self.client.get(f'{BASE_URL}me/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 1)

    def test_employee_cannot_list_company_attendance(self):
        self.client.force_authenticate(user=self.employee.user)

        response = self.client.get(BASE_URL)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_with_filters(self):
        self._record(day=14)
        self._record(day=15, status=AttendanceStatus.LATE)
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(BASE_URL, {'status': 'LATE'})
        self.assertEqual(response.data['data']['count'], 1)

        response = self.client.get(BASE_URL, {'date_from': '2025-01-14', 'date_to': '2025-01-14'})
        self.assertEqual(response.data['data']['count'], 1)
        self.assertEqual(response.data['data']['results'][0]['date'], '2025-01-14')

    def test_detail_other_company_forbidden(self):
        other = make_company('Globex', code='GLX')
        stranger = make_employee(other, 'joe@globex.test')
        record = AttendanceDay.objects.create(company=other, employee=stranger, date=date(2025, 1, 15))
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'{BASE_URL}{record.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_manual_create_and_update(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(BASE_URL, {
            'employee_id': self.employee.id,
            'date': '2025-01-15',
            'check_in_time': aware(15, 9, 0).isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        record_id = response.data['id']

        response = self.client.patch(f'{BASE_URL}{record_id}/', {
            'check_out_time': aware(15, 11, 0).isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], AttendanceStatus.HALF_DAY)
        self.assertEqual(response.data['total_work_minutes'], 120)

    def test_manager_cannot_create_manually(self):
        manager = make_user('boss@acme.test', role=UserRole.MANAGER, company=self.company)
        self.client.force_authenticate(user=manager)

        response = self.client.post(BASE_URL, {'employee_id': self.employee.id, 'date': '2025-01-15'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_export_csv(self):
        self._record()
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'{BASE_URL}export/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response['Content-Type'].startswith('text/csv'))

        lines = response.content.decode().splitlines()
        self.assertTrue(lines[0].startswith('employee_code,employee_id,date,status'))
        self.assertTrue(lines[1].startswith('ACME001,'))

    def test_export_xlsx(self):
        self._record()
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'{BASE_URL}export/', {'file_format': 'xlsx'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        ws = load_workbook(BytesIO(response.content)).active
        self.assertEqual(ws.cell(row=1, column=1).value, 'employee_code')
        self.assertEqual(ws.cell(row=2, column=1).value, 'ACME001')

    def test_export_unknown_format(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'{BASE_URL}export/', {'file_format': 'pdf'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_import_csv(self):
        self.client.force_authenticate(user=self.admin)
        upload = SimpleUploadedFile(
            'attendance.csv',
            b'employee_code,date,check_in_time,check_out_time\nACME001,2025-01-15,09:00,17:00\n',
            content_type='text/csv'
        )

        response = self.client.post(f'{BASE_URL}import/', {'file': upload}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['success_count'], 1)
        self.assertTrue(AttendanceDay.objects.filter(employee=self.employee, date=date(2025, 1, 15)).exists())

    def test_import_without_file(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(f'{BASE_URL}import/', {}, format='multipart')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_import_template(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.get(f'{BASE_URL}import/template/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        ws = load_workbook(BytesIO(response.content)).active
        self.assertEqual(ws.cell(row=1, column=1).value, 'employee_code')

    def test_mark_absents(self):
        make_employee(self.company, 'joe@acme.test')
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(f'{BASE_URL}mark-absents/', {'date': '2025-01-15'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['created'], 2)
