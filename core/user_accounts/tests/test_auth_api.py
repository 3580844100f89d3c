"""
Tests for authentication endpoints: bootstrap, login, logout, me and
password change.
"""
from django.conf import settings
from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import DEFAULT_PASSWORD, make_company, make_company_admin, make_super_admin
from core.companies.models import CompanyStatus
from core.user_accounts.models import UserRole

User = get_user_model()


class SuperAdminBootstrapTest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = '/auth/super-admin/'
        self.payload = {
            'email': 'Root@HRM.test',
            'password': DEFAULT_PASSWORD,
            'name': 'Root',
        }

    def test_first_super_admin_created(self):
        response = self.client.post(self.url, self.payload, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['data']['role'], UserRole.SUPER_ADMIN)
        self.assertEqual(response.data['data']['email'], 'root@hrm.test')
        self.assertIsNone(response.data['data']['company_id'])

    def test_second_bootstrap_conflicts(self):
        make_super_admin()

        response = self.client.post(self.url, dict(self.payload, email='other@hrm.test'), format='json')
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)

    def test_short_password_rejected(self):
        response = self.client.post(self.url, dict(self.payload, password='abc'), format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(User.objects.exists())


class LoginAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = '/auth/login/'
        self.company = make_company('Acme', code='ACME')
        self.admin = make_company_admin(self.company)

    def _login(self, email=None, password=DEFAULT_PASSWORD):
        return self.client.post(self.url, {'email': email or self.admin.email, 'password': password}, format='json')

    def test_login_returns_tokens_and_sets_cookie(self):
        response = self._login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data['data']['tokens'])
        self.assertIn('refresh', response.data['data']['tokens'])
        self.assertEqual(response.data['data']['user']['company']['code'], 'ACME')

        cookie = response.cookies[settings.AUTH_COOKIE['NAME']]
        self.assertTrue(cookie['httponly'])

    def test_email_is_case_insensitive(self):
        response = self._login(email=self.admin.email.upper())
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_wrong_password(self):
        response = self._login(password='not-the-password')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_inactive_user(self):
        self.admin.is_active = False
        self.admin.save()

        response = self._login()
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_suspended_company(self):
        self.company.status = CompanyStatus.SUSPENDED
        self.company.save()

        response = self._login()
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn('suspended', response.data['message'])

    def test_cookie_authenticates_following_requests(self):
        access = self._login().data['data']['tokens']['access']

        client = APIClient()
        client.cookies[settings.AUTH_COOKIE['NAME']] = access
        response = client.get('/auth/me/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['email'], self.admin.email)

    def test_bearer_rejected_after_company_archived(self):
        access = self._login().data['data']['tokens']['access']
        self.company.status = CompanyStatus.ARCHIVED
        self.company.save()

        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')
        response = self.client.get('/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_blacklists_refresh_token(self):
        tokens = self._login().data['data']['tokens']
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post('/auth/logout/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post('/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class ChangePasswordAPITest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.url = '/auth/change-password/'
        self.user = make_super_admin()
        self.client.force_authenticate(user=self.user)

    def test_change_password(self):
        response = self.client.post(self.url, {
            'current_password': DEFAULT_PASSWORD,
            'new_password': 'N3w-Secret-Value',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('N3w-Secret-Value'))

    def test_wrong_current_password(self):
        response = self.client.post(self.url, {
            'current_password': 'wrong-one',
            'new_password': 'N3w-Secret-Value',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('current_password', response.data)

    def test_same_password_rejected(self):
        response = self.client.post(self.url, {
            'current_password': DEFAULT_PASSWORD,
            'new_password': DEFAULT_PASSWORD,
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
