"""
API Tests for attendance regularizations.
"""
from datetime import datetime, time, timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from HR.attendance.models import AttendanceDay, AttendanceLog, AttendanceStatus, LogType
from HR.attendance_regularization.models import AttendanceRegularization, RegularizationStatus
from core.base.test_utils import make_company, make_company_admin, make_employee, make_shift

BASE_URL = '/hr/regularizations/'


def aware(on_date, hour, minute=0):
    return timezone.make_aware(datetime.combine(on_date, time(hour, minute)))


class RegularizationAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.shift = make_shift(self.company)
        self.employee = make_employee(self.company, 'jane@acme.test', work_shift=self.shift)
        self.colleague = make_employee(self.company, 'joe@acme.test', work_shift=self.shift)
        self.day = timezone.localdate() - timedelta(days=2)

    def _payload(self, **overrides):
        data = {
            'date': self.day.isoformat(),
            'request_type': 'MISSED_CHECKOUT',
            'requested_check_out_time': '17:00',
            'reason': 'Forgot to check out',
        }
        data.update(overrides)
        return data

    def _submit(self, user=None, **overrides):
        self.client.force_authenticate(user=user or self.employee.user)
        return self.client.post(BASE_URL, self._payload(**overrides), format='json')

    def _review(self, regularization_id, action, note=''):
        self.client.force_authenticate(user=self.admin)
        return self.client.patch(
            f'{BASE_URL}admin/{regularization_id}/{action}/', {'review_note': note}, format='json'
        )

    def _open_day(self):
        return AttendanceDay.objects.create(
            company=self.company,
            employee=self.employee,
            work_shift=self.shift,
            date=self.day,
            check_in_time=aware(self.day, 9),
            status=AttendanceStatus.PRESENT,
        )

    # Filing

    def test_submit_keeps_snapshot_of_current_day(self):
        day = self._open_day()

        response = self._submit()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['status'], RegularizationStatus.PENDING)
        self.assertEqual(data['attendance_day'], day.id)
        self.assertEqual(data['requested_check_out_time'], '17:00:00')
        self.assertEqual(data['before_snapshot']['status'], AttendanceStatus.PRESENT)
        self.assertIsNone(data['before_snapshot']['check_out_time'])

    def test_submit_without_attendance_day(self):
        response = self._submit(
            request_type='FULL_DAY_EDIT',
            requested_check_in_time='09:00',
            requested_check_out_time='17:00'
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertIsNone(response.data['data']['attendance_day'])
        self.assertIsNone(response.data['data']['before_snapshot'])

    def test_future_date_rejected(self):
        tomorrow = timezone.localdate() + timedelta(days=1)

        response = self._submit(date=tomorrow.isoformat())

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'Cannot request regularization for a future date')

    def test_date_older_than_thirty_days_rejected(self):
        old = timezone.localdate() - timedelta(days=31)

        response = self._submit(date=old.isoformat())

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'Regularization allowed only within past 30 days')

    def test_missing_time_for_request_type(self):
        response = self._submit(request_type='MISSED_CHECKIN')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('requested_check_in_time', response.data)

    def test_check_out_before_check_in_rejected(self):
        response = self._submit(
            request_type='WRONG_TIME',
            requested_check_in_time='17:00',
            requested_check_out_time='09:00'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'Check-out must be after check-in')

    def test_invalid_time_format(self):
        response = self._submit(requested_check_out_time='5pm')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_pending_conflict(self):
        self._submit()
        response = self._submit()

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(AttendanceRegularization.objects.count(), 1)

    def test_employee_cannot_file_for_colleague(self):
        response = self._submit(employee_id=self.colleague.id)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_files_on_behalf_of_employee(self):
        response = self._submit(user=self.admin, employee_id=self.colleague.id)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['employee'], self.colleague.id)

    # Own requests

    def test_my_list_only_own(self):
        self._submit()
        self._submit(user=self.admin, employee_id=self.colleague.id)

        self.client.force_authenticate(user=self.employee.user)
        response = self.client.get(f'{BASE_URL}me/', {'status': 'PENDING'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 1)

    def test_my_detail_of_colleague_not_found(self):
        other = self._submit(user=self.admin, employee_id=self.colleague.id).data['data']['id']

        self.client.force_authenticate(user=self.employee.user)
        response = self.client.get(f'{BASE_URL}me/{other}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_cancel_only_pending(self):
        regularization_id = self._submit().data['data']['id']

        response = self.client.patch(f'{BASE_URL}me/{regularization_id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], RegularizationStatus.CANCELLED)

        response = self.client.patch(f'{BASE_URL}me/{regularization_id}/cancel/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'Only pending requests can be cancelled')

    # Review

    def test_employee_cannot_list_company_requests(self):
        self.client.force_authenticate(user=self.employee.user)
        response = self.client.get(f'{BASE_URL}admin/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_list_filters(self):
        self._submit()
        self._submit(user=self.admin, employee_id=self.colleague.id, request_type='MISSED_CHECKIN',
                     requested_check_in_time='09:00')

        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'{BASE_URL}admin/', {'request_type': 'MISSED_CHECKIN'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 1)
        self.assertEqual(response.data['data']['results'][0]['employee'], self.colleague.id)

    def test_approve_closes_open_day(self):
        self._open_day()
        regularization_id = self._submit().data['data']['id']

        response = self._review(regularization_id, 'approve', 'Verified with gate logs')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['status'], RegularizationStatus.APPROVED)
        self.assertEqual(data['review_note'], 'Verified with gate logs')
        self.assertEqual(data['reviewed_by'], self.admin.id)
        self.assertIsNone(data['before_snapshot']['check_out_time'])
        self.assertEqual(data['after_snapshot']['total_work_minutes'], 480)

        day = AttendanceDay.objects.get(employee=self.employee, date=self.day)
        self.assertEqual(day.check_out_time, aware(self.day, 17))
        self.assertEqual(day.status, AttendanceStatus.PRESENT)
        self.assertEqual(day.total_work_minutes, 480)
        self.assertTrue(AttendanceLog.objects.filter(attendance_day=day, type=LogType.CHECK_OUT).exists())

    def test_approve_creates_missing_day(self):
        regularization_id = self._submit(
            request_type='FULL_DAY_EDIT',
            requested_check_in_time='09:40',
            requested_check_out_time='17:00'
        ).data['data']['id']

        response = self._review(regularization_id, 'approve')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        day = AttendanceDay.objects.get(employee=self.employee, date=self.day)
        self.assertEqual(day.status, AttendanceStatus.LATE)
        self.assertEqual(day.late_minutes, 40)
        self.assertEqual(response.data['data']['attendance_day'], day.id)

    def test_approve_missed_checkout_without_check_in_fails(self):
        regularization_id = self._submit().data['data']['id']

        response = self._review(regularization_id, 'approve')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            AttendanceRegularization.objects.get(pk=regularization_id).status,
            RegularizationStatus.PENDING
        )
        self.assertFalse(AttendanceDay.objects.filter(employee=self.employee, date=self.day).exists())

    def test_overnight_check_out_lands_on_next_day(self):
        night = make_shift(self.company, 'Night', time(22, 0), time(6, 0))
        self.employee.work_shift = night
        self.employee.save()

        regularization_id = self._submit(
            request_type='FULL_DAY_EDIT',
            requested_check_in_time='22:00',
            requested_check_out_time='06:00'
        ).data['data']['id']
        response = self._review(regularization_id, 'approve')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        day = AttendanceDay.objects.get(employee=self.employee, date=self.day)
        self.assertEqual(day.check_out_time, aware(self.day + timedelta(days=1), 6))
        self.assertEqual(day.total_work_minutes, 480)

    def test_reject_leaves_attendance_alone(self):
        day = self._open_day()
        regularization_id = self._submit().data['data']['id']

        response = self._review(regularization_id, 'reject', 'No proof')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['status'], RegularizationStatus.REJECTED)
        day.refresh_from_db()
        self.assertIsNone(day.check_out_time)

    def test_reviewed_request_cannot_be_reviewed_again(self):
        regularization_id = self._submit().data['data']['id']
        self._review(regularization_id, 'reject')

        response = self._review(regularization_id, 'approve')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'Only pending requests can be approved')

    def test_other_company_cannot_review(self):
        regularization_id = self._submit().data['data']['id']
        other_admin = make_company_admin(make_company('Globex', code='GLX'))

        self.client.force_authenticate(user=other_admin)
        response = self.client.get(f'{BASE_URL}admin/{regularization_id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_unknown_request_not_found(self):
        self.client.force_authenticate(user=self.admin)
        response = self.client.get(f'{BASE_URL}admin/999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
