"""
API Tests for company notices.
"""
from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient

from HR.notices.models import Notice, NoticeAudience, NoticeRead, NoticeStatus
from core.base.test_utils import (
    make_company, make_company_admin, make_department, make_designation,
    make_employee, make_shift, make_user
)
from core.user_accounts.models import UserRole

BASE_URL = '/hr/notices/'


class NoticeAdminAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)
        self.client.force_authenticate(user=self.admin)

        self.department = make_department(self.company, 'Engineering')
        self.other_company = make_company('Globex', code='GLX')

    def _create(self, **overrides):
        data = {'title': 'Office closed', 'body': 'Closed on Friday for maintenance'}
        data.update(overrides)
        return self.client.post(BASE_URL, data, format='json')

    def test_create_company_wide_draft(self):
        response = self._create()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data['data']
        self.assertEqual(data['status'], NoticeStatus.DRAFT)
        self.assertEqual(data['priority'], 'NORMAL')
        self.assertTrue(data['is_company_wide'])
        self.assertIsNone(data['expires_at'])

    def test_published_without_expiry_expires_in_a_month(self):
        before = timezone.now()
        response = self._create(status='PUBLISHED')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        notice = Notice.objects.get(pk=response.data['data']['id'])
        self.assertGreaterEqual(notice.expires_at, before + timedelta(days=28))
        self.assertLessEqual(notice.expires_at, timezone.now() + timedelta(days=31))

    def test_expiry_follows_publish_at(self):
        publish_at = timezone.now() + timedelta(days=3)
        response = self._create(publish_at=publish_at.isoformat())

        notice = Notice.objects.get(pk=response.data['data']['id'])
        self.assertGreater(notice.expires_at, publish_at + timedelta(days=27))

    def test_expiry_before_publish_rejected(self):
        publish_at = timezone.now() + timedelta(days=3)
        response = self._create(
            publish_at=publish_at.isoformat(),
            expires_at=(publish_at - timedelta(hours=1)).isoformat()
        )

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('expires_at', response.data)
        self.assertFalse(Notice.objects.exists())

    def test_audiences_make_notice_targeted(self):
        response = self._create(
            is_company_wide=True,
            audiences=[{'audience_type': 'DEPARTMENT', 'department_id': self.department.id}]
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.data['data']['is_company_wide'])
        self.assertEqual(len(response.data['data']['audiences']), 1)

    def test_targeted_notice_requires_audiences(self):
        response = self._create(is_company_wide=False)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('audiences', response.data)

    def test_audience_missing_target(self):
        response = self._create(audiences=[
            {'audience_type': 'ROLE', 'role': 'manager'},
            {'audience_type': 'DESIGNATION'},
        ])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'audiences[1].designation_id is required')

    def test_audience_from_other_company_rejected(self):
        foreign = make_department(self.other_company, 'Sales')

        response = self._create(audiences=[{'audience_type': 'DEPARTMENT', 'department_id': foreign.id}])

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data, 'One or more departments are invalid')

    def test_unknown_role_rejected(self):
        response = self._create(audiences=[{'audience_type': 'ROLE', 'role': 'super_admin'}])
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_employee_cannot_author(self):
        employee = make_employee(self.company, 'jane@acme.test')
        self.client.force_authenticate(user=employee.user)

        response = self._create()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_update_replaces_audiences(self):
        designation = make_designation(self.company, 'Engineer')
        notice_id = self._create(
            audiences=[{'audience_type': 'DEPARTMENT', 'department_id': self.department.id}]
        ).data['data']['id']

        response = self.client.patch(f'{BASE_URL}{notice_id}/', {
            'title': 'Updated',
            'audiences': [{'audience_type': 'DESIGNATION', 'designation_id': designation.id}],
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['title'], 'Updated')
        self.assertEqual(len(response.data['audiences']), 1)
        self.assertEqual(response.data['audiences'][0]['designation'], designation.id)
        self.assertEqual(NoticeAudience.objects.filter(notice_id=notice_id).count(), 1)

    def test_update_to_targeted_without_audiences_rejected(self):
        notice_id = self._create().data['data']['id']

        response = self.client.patch(f'{BASE_URL}{notice_id}/', {'is_company_wide': False}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(Notice.objects.get(pk=notice_id).is_company_wide)

    def test_list_filters_and_read_count(self):
        published = self._create(title='Holiday', status='PUBLISHED').data['data']['id']
        self._create(title='Draft memo')
        employee = make_employee(self.company, 'jane@acme.test')
        NoticeRead.objects.create(notice_id=published, employee=employee)

        response = self.client.get(BASE_URL, {'status': 'PUBLISHED'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['count'], 1)
        self.assertEqual(response.data['data']['results'][0]['read_count'], 1)

        response = self.client.get(BASE_URL, {'search': 'memo'})
        self.assertEqual(response.data['data']['count'], 1)

    def test_detail_includes_reads(self):
        notice_id = self._create(status='PUBLISHED').data['data']['id']
        employee = make_employee(self.company, 'jane@acme.test')
        NoticeRead.objects.create(notice_id=notice_id, employee=employee)

        response = self.client.get(f'{BASE_URL}{notice_id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['read_count'], 1)
        self.assertEqual(response.data['reads'][0]['employee'], employee.id)

    def test_other_company_notice_forbidden(self):
        notice = Notice.objects.create(company=self.other_company, title='Theirs', body='x')

        response = self.client.get(f'{BASE_URL}{notice.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        response = self.client.delete(f'{BASE_URL}{notice.id}/')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Notice.objects.filter(pk=notice.id).exists())

    def test_delete(self):
        notice_id = self._create().data['data']['id']

        response = self.client.delete(f'{BASE_URL}{notice_id}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Notice.objects.filter(pk=notice_id).exists())

    def test_unknown_notice_not_found(self):
        response = self.client.get(f'{BASE_URL}999999/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)


class MyNoticesAPITest(TestCase):

    def setUp(self):
        self.client = APIClient()
        self.company = make_company('Acme', code='ACME')
        self.engineering = make_department(self.company, 'Engineering')
        self.sales = make_department(self.company, 'Sales')
        self.night = make_shift(self.company, 'Night')

        self.employee = make_employee(
            self.company, 'jane@acme.test', department=self.engineering, work_shift=self.night
        )
        self.client.force_authenticate(user=self.employee.user)

    def _notice(self, title, audiences=(), **extra):
        values = {'status': NoticeStatus.PUBLISHED, 'is_company_wide': not audiences}
        values.update(extra)
        notice = Notice.objects.create(company=self.company, title=title, body=title, **values)
        for audience in audiences:
            NoticeAudience.objects.create(notice=notice, **audience)
        return notice

    def _titles(self, **params):
        response = self.client.get(f'{BASE_URL}me/', params)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        return sorted(item['title'] for item in response.data['data']['results'])

    def test_visibility_rules(self):
        now = timezone.now()
        self._notice('Company wide')
        self._notice('Draft', status=NoticeStatus.DRAFT)
        self._notice('Archived', status=NoticeStatus.ARCHIVED)
        self._notice('Scheduled', publish_at=now + timedelta(days=1))
        self._notice('Expired', expires_at=now - timedelta(minutes=1))
        self._notice('Engineering', [{'audience_type': 'DEPARTMENT', 'department': self.engineering}])
        self._notice('Sales', [{'audience_type': 'DEPARTMENT', 'department': self.sales}])
        self._notice('Night shift', [{'audience_type': 'WORK_SHIFT', 'work_shift': self.night}])
        self._notice('Just Jane', [{'audience_type': 'EMPLOYEE', 'employee': self.employee}])
        self._notice('Employees', [{'audience_type': 'ROLE', 'role': UserRole.EMPLOYEE}])
        self._notice('Managers', [{'audience_type': 'ROLE', 'role': UserRole.MANAGER}])
        Notice.objects.create(
            company=make_company('Globex', code='GLX'), title='Other tenant', body='x',
            status=NoticeStatus.PUBLISHED
        )

        self.assertEqual(
            self._titles(),
            ['Company wide', 'Employees', 'Engineering', 'Just Jane', 'Night shift']
        )

    def test_matching_several_audiences_listed_once(self):
        self._notice('Both', [
            {'audience_type': 'DEPARTMENT', 'department': self.engineering},
            {'audience_type': 'ROLE', 'role': UserRole.EMPLOYEE},
        ])
        self.assertEqual(self._titles(), ['Both'])

    def test_mark_read_and_unread_filter(self):
        first = self._notice('First')
        self._notice('Second')

        response = self.client.post(f'{BASE_URL}me/{first.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['data']['is_read'])

        response = self.client.post(f'{BASE_URL}me/{first.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(NoticeRead.objects.filter(notice=first).count(), 1)

        self.assertEqual(self._titles(unread_only='true'), ['Second'])

        response = self.client.get(f'{BASE_URL}me/{first.id}/')
        self.assertTrue(response.data['is_read'])
        self.assertIsNotNone(response.data['read_at'])

    def test_search(self):
        self._notice('Payroll update')
        self._notice('Holiday list')
        self.assertEqual(self._titles(search='payroll'), ['Payroll update'])

    def test_hidden_notice_not_found(self):
        hidden = self._notice('Sales', [{'audience_type': 'DEPARTMENT', 'department': self.sales}])

        response = self.client.get(f'{BASE_URL}me/{hidden.id}/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

        response = self.client.post(f'{BASE_URL}me/{hidden.id}/read/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_user_without_employee_record(self):
        manager = make_user('boss@acme.test', role=UserRole.MANAGER, company=self.company)
        self.client.force_authenticate(user=manager)

        response = self.client.get(f'{BASE_URL}me/')
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
