"""
API Tests for WorkShift endpoints.
"""
from datetime import time

from django.test import TestCase
from rest_framework import status
from rest_framework.test import APIClient

from HR.work_structures.models import WorkShift
from core.base.test_utils import make_company, make_company_admin, make_shift

BASE_URL = '/hr/work_structures/work-shifts/'


class WorkShiftAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.client.force_authenticate(user=self.admin)
        self.day_shift = make_shift(self.company, 'Day', time(9, 0), time(17, 0))

    def test_create_shift_with_short_times(self):
        data = {'name': 'Morning', 'start_time': '06:00', 'end_time': '14:00'}
        response = self.client.post(BASE_URL, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['start_time'], '06:00:00')
        self.assertEqual(response.data['duration_minutes'], 480)
        self.assertFalse(response.data['is_overnight'])

    def test_create_overnight_shift(self):
        data = {'name': 'Night', 'start_time': '22:00:00', 'end_time': '06:00:00'}
        response = self.client.post(BASE_URL, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['is_overnight'])
        self.assertEqual(response.data['duration_minutes'], 480)

    def test_invalid_time_format(self):
        for value in ['24:00', '9:00', '09:60', '0900', 'noon']:
            data = {'name': f'Bad {value}', 'start_time': value, 'end_time': '17:00'}
            response = self.client.post(BASE_URL, data, format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, value)
            self.assertIn('start_time', response.data)

    def test_same_start_and_end_rejected(self):
        data = {'name': 'Zero', 'start_time': '09:00', 'end_time': '09:00:00'}
        response = self.client.post(BASE_URL, data, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('end_time', response.data)

    def test_update_end_time_equal_to_existing_start_rejected(self):
        response = self.client.patch(
            f'{BASE_URL}{self.day_shift.id}/',
            {'end_time': '09:00'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.day_shift.refresh_from_db()
        self.assertEqual(self.day_shift.end_time, time(17, 0))

    def test_update_shift_times(self):
        response = self.client.patch(
            f'{BASE_URL}{self.day_shift.id}/',
            {'start_time': '08:30', 'end_time': '16:30'},
            format='json'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.day_shift.refresh_from_db()
        self.assertEqual(self.day_shift.start_time, time(8, 30))

    def test_sort_by_start_time(self):
        make_shift(self.company, 'Early', time(6, 0), time(14, 0))
        response = self.client.get(f'{BASE_URL}?sort_by=start_time&sort_order=asc')

        names = [row['name'] for row in response.data['data']['results']]
        self.assertEqual(names, ['Early', 'Day'])

    def test_delete_shift(self):
        response = self.client.delete(f'{BASE_URL}{self.day_shift.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(WorkShift.objects.exists())
