"""
API Tests for company logo uploads (multipart/form-data).
"""
import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import DEFAULT_PASSWORD, make_company, make_super_admin
from core.companies.models import Company

BASE_URL = '/core/companies/'

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def png_file(name='logo.png'):
    return SimpleUploadedFile(name, PNG_BYTES, content_type='image/png')


class CompanyLogoUploadTest(APITestCase):

    def setUp(self):
        self.media_root = tempfile.mkdtemp()
        self.settings_override = override_settings(MEDIA_ROOT=self.media_root)
        self.settings_override.enable()

        self.client = APIClient()
        self.client.force_authenticate(user=make_super_admin())

    def tearDown(self):
        self.settings_override.disable()
        shutil.rmtree(self.media_root, ignore_errors=True)

    def test_create_company_with_logo(self):
        response = self.client.post(BASE_URL, {
            'company_name': 'Acme Corp',
            'company_code': 'ACME',
            'admin_email': 'admin@acme.test',
            'admin_password': DEFAULT_PASSWORD,
            'logo': png_file(),
        }, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        logo_url = response.data['data']['company']['logo_url']
        self.assertTrue(logo_url.startswith('/uploads/companies/company-'))
        self.assertTrue(logo_url.endswith('.png'))
        self.assertEqual(Company.objects.get(code='ACME').logo_url, logo_url)

    def test_update_replaces_logo(self):
        company = make_company('Acme', code='ACME')

        response = self.client.patch(
            f'{BASE_URL}{company.id}/',
            {'logo': png_file('new.png'), 'city': 'Pokhara'},
            format='multipart'
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        company.refresh_from_db()
        self.assertTrue(company.logo_url.startswith('/uploads/companies/company-'))
        self.assertEqual(company.city, 'Pokhara')

    def test_non_image_rejected(self):
        company = make_company('Acme', code='ACME')
        text_file = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')

        response = self.client.patch(f'{BASE_URL}{company.id}/', {'logo': text_file}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('Invalid file type', str(response.data['logo'][0]))
        company.refresh_from_db()
        self.assertEqual(company.logo_url, '')

    def test_oversized_image_rejected(self):
        company = make_company('Acme', code='ACME')
        big = SimpleUploadedFile('big.png', b'\x00' * (5 * 1024 * 1024 + 1), content_type='image/png')

        response = self.client.patch(f'{BASE_URL}{company.id}/', {'logo': big}, format='multipart')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(
            str(response.data['logo'][0]),
            'File size exceeds maximum allowed size of 5MB'
        )
