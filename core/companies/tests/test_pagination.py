"""
Paging of list endpoints, exercised through the company list.
"""
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from core.base.test_utils import make_company, make_super_admin

BASE_URL = '/core/companies/'


class ListPaginationTest(APITestCase):

    def setUp(self):
        self.client = APIClient()
        self.client.force_authenticate(user=make_super_admin())
        for index in range(5):
            make_company(f'Company {index}', code=f'C{index}')

    def test_envelope(self):
        response = self.client.get(BASE_URL, {'page_size': 2, 'page': 2})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data['data']
        self.assertEqual(data['count'], 5)
        self.assertEqual(data['page'], 2)
        self.assertEqual(data['total_pages'], 3)
        self.assertTrue(data['has_next'])
        self.assertTrue(data['has_previous'])
        self.assertEqual(len(data['results']), 2)

    def test_limit_alias(self):
        response = self.client.get(BASE_URL, {'limit': 3})

        self.assertEqual(response.data['data']['page_size'], 3)
        self.assertEqual(len(response.data['data']['results']), 3)

    def test_page_past_the_end_clamped_to_last(self):
        response = self.client.get(BASE_URL, {'page_size': 2, 'page': 9})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['page'], 3)
        self.assertEqual(len(response.data['data']['results']), 1)

    def test_bad_values_fall_back_to_defaults(self):
        response = self.client.get(BASE_URL, {'page_size': 'many', 'page': 'zero'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['page'], 1)
        self.assertEqual(response.data['data']['page_size'], 20)

    def test_page_size_capped(self):
        response = self.client.get(BASE_URL, {'page_size': 1000})
        self.assertEqual(response.data['data']['page_size'], 100)
