"""
API Tests for Company (tenant) endpoints.
"""
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import DEFAULT_PASSWORD, make_company, make_company_admin, make_employee, make_super_admin
from core.companies.models import Company, CompanyStatus
from core.user_accounts.models import UserRole

User = get_user_model()

BASE_URL = '/core/companies/'


class CompanyAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.root = make_super_admin()
        self.client.force_authenticate(user=self.root)

    def _payload(self, **overrides):
        data = {
            'company_name': 'Acme Corp',
            'company_code': 'ACME',
            'admin_email': 'Admin@Acme.test',
            'admin_password': DEFAULT_PASSWORD,
            'admin_name': 'Alice Admin',
            'city': 'Kathmandu',
            'max_employees': 50,
        }
        data.update(overrides)
        return data

    def test_create_company_with_admin(self):
        response = self.client.post(BASE_URL, self._payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['company']['code'], 'ACME')
        self.assertEqual(response.data['data']['admin']['role'], UserRole.COMPANY_ADMIN)

        admin = User.objects.get(email='admin@acme.test')
        self.assertEqual(admin.company.name, 'Acme Corp')

    def test_duplicate_company_name_conflict(self):
        make_company('acme corp', code='OTHER')

        response = self.client.post(BASE_URL, self._payload(), format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_taken_admin_email_creates_nothing(self):
        existing = make_company('Globex', code='GLX')
        make_company_admin(existing, email='admin@acme.test')

        response = self.client.post(BASE_URL, self._payload(), format='json')

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertFalse(Company.objects.filter(code='ACME').exists())

    def test_invalid_code(self):
        response = self.client.post(BASE_URL, self._payload(company_code='AC ME'), format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_only_super_admin(self):
        company = make_company('Globex', code='GLX')
        self.client.force_authenticate(user=make_company_admin(company))

        response = self.client.get(BASE_URL)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_filters(self):
        make_company('Acme', code='ACME')
        make_company('Globex', code='GLX', status=CompanyStatus.SUSPENDED)

        response = self.client.get(BASE_URL, {'status': 'suspended'})
        self.assertEqual(response.data['data']['count'], 1)
        self.assertEqual(response.data['data']['results'][0]['code'], 'GLX')

        response = self.client.get(BASE_URL, {'search': 'acm'})
        self.assertEqual(response.data['data']['count'], 1)

    def test_detail_includes_admin_and_headcount(self):
        company = make_company('Acme', code='ACME')
        admin = make_company_admin(company)
        make_employee(company, 'jane@acme.test')

        response = self.client.get(f'{BASE_URL}{company.id}/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['admin_email'], admin.email)
        self.assertEqual(response.data['employee_count'], 1)
        self.assertEqual(response.data['active_employee_count'], 1)
        self.assertEqual(response.data['user_count'], 2)

    def test_update_company(self):
        company = make_company('Acme', code='ACME')

        response = self.client.patch(f'{BASE_URL}{company.id}/', {'city': 'Pokhara'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['city'], 'Pokhara')

    def test_update_status(self):
        company = make_company('Acme', code='ACME')

        response = self.client.patch(f'{BASE_URL}{company.id}/status/', {'status': 'archived'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        company.refresh_from_db()
        self.assertEqual(company.status, CompanyStatus.ARCHIVED)

    def test_delete_blocked_while_users_exist(self):
        company = make_company('Acme', code='ACME')
        make_company_admin(company)

        response = self.client.delete(f'{BASE_URL}{company.id}/')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete_empty_company(self):
        company = make_company('Acme', code='ACME')

        response = self.client.delete(f'{BASE_URL}{company.id}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Company.objects.filter(pk=company.id).exists())
