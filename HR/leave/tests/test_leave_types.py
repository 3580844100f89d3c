from datetime import date

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from HR.leave.models import LeaveRequest, LeaveType
from core.base.test_utils import make_company, make_company_admin, make_employee

BASE_URL = '/hr/leave/types/'


class LeaveTypeAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.employee = make_employee(self.company, 'jane@acme.test')

    def test_admin_creates_leave_type(self):
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(BASE_URL, {'name': 'Annual Leave', 'code': 'AL'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['company'], self.company.id)

    def test_duplicate_name_conflict(self):
        LeaveType.objects.create(company=self.company, name='Annual Leave')
        self.client.force_authenticate(user=self.admin)

        response = self.client.post(BASE_URL, {'name': 'annual leave'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_employee_can_read_but_not_write(self):
        LeaveType.objects.create(company=self.company, name='Sick Leave')
        self.client.force_authenticate(user=self.employee.user)

        response = self.client.get(BASE_URL)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 1)

        response = self.client.post(BASE_URL, {'name': 'Free Days'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_delete_blocked_while_requests_exist(self):
        leave_type = LeaveType.objects.create(company=self.company, name='Sick Leave')
        LeaveRequest.objects.create(
            company=self.company, employee=self.employee, leave_type=leave_type,
            start_date=date(2025, 1, 15), end_date=date(2025, 1, 15), total_days=1, reason='Flu'
        )
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(f'{BASE_URL}{leave_type.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(LeaveType.objects.filter(pk=leave_type.id).exists())

    def test_delete_unused(self):
        leave_type = LeaveType.objects.create(company=self.company, name='Sick Leave')
        self.client.force_authenticate(user=self.admin)

        response = self.client.delete(f'{BASE_URL}{leave_type.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
