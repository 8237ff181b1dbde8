"""
Tests for the tax calculation API endpoints
"""

from unittest import mock

from django.test import SimpleTestCase, override_settings
from django.urls import reverse
from rest_framework.test import APIClient

from api.utils.pii_logger import REDACTED_AMOUNT

VIEWS_LOGGER = 'api.views.tax_views'


class TaxCalculationApiTests(SimpleTestCase):

    def setUp(self):
        self.client = APIClient()

    def test_calculate_new_regime(self):
        response = self.client.post(
            reverse('api_tax_calculate'),
            {'gross_income': 1200000, 'regime': 'new'},
            format='json',
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['regime'], 'new')
        self.assertEqual(data['taxable_income'], 1150000)
        self.assertEqual(data['total_tax'], 85800)
        for key in ('tax_before_rebate', 'rebate', 'tax_after_rebate', 'surcharge', 'cess', 'tax_before_cess'):
            self.assertIn(key, data)

    def test_calculate_old_regime_with_deductions(self):
        response = self.client.post(
            reverse('api_tax_calculate'),
            {'gross_income': 1200000, 'total_deductions': 200000, 'regime': 'OLD'},
            format='json',
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['total_tax'], 106600)

    def test_calculate_rejects_unknown_regime(self):
        response = self.client.post(
            reverse('api_tax_calculate'),
            {'gross_income': 1200000, 'regime': 'flat'},
            format='json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('regime', response.json())

    def test_calculate_rejects_negative_income(self):
        response = self.client.post(
            reverse('api_tax_calculate'),
            {'gross_income': -5, 'regime': 'new'},
            format='json',
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('gross_income', response.json())

    def test_calculate_requires_income(self):
        response = self.client.post(reverse('api_tax_calculate'), {'regime': 'new'}, format='json')
        self.assertEqual(response.status_code, 400)

    def test_calculate_only_accepts_post(self):
        response = self.client.get(reverse('api_tax_calculate'))
        self.assertEqual(response.status_code, 405)

    def test_compare_regimes(self):
        response = self.client.post(
            reverse('api_tax_compare'),
            {'gross_income': 1500000, 'old_regime_deductions': 200000},
            format='json',
        )
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['old_regime']['total_tax'], 195000)
        self.assertEqual(data['new_regime']['total_tax'], 145600)
        self.assertEqual(data['comparison']['recommended_regime'], 'new')
        self.assertEqual(data['comparison']['savings'], 49400)

    @override_settings(LOG_PII=False)
    def test_calculate_failure_logs_redacted_income(self):
        with mock.patch(
            'api.views.tax_views.IncomeTaxCalculator.calculate_tax_payable',
            side_effect=ArithmeticError,
        ):
            with self.assertLogs(VIEWS_LOGGER, level='ERROR') as captured:
                response = self.client.post(
                    reverse('api_tax_calculate'),
                    {'gross_income': 1200000, 'regime': 'new'},
                    format='json',
                )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['error'], 'Unable to calculate tax')
        message = captured.records[0].getMessage()
        self.assertIn(REDACTED_AMOUNT, message)
        self.assertIn('ArithmeticError', message)
        self.assertNotIn('1,200,000', message)

    @override_settings(LOG_PII=True)
    def test_compare_logs_savings_when_enabled(self):
        with self.assertLogs(VIEWS_LOGGER, level='INFO') as captured:
            self.client.post(
                reverse('api_tax_compare'),
                {'gross_income': 1500000, 'old_regime_deductions': 200000},
                format='json',
            )
        self.assertIn('recommended: new, savings ₹49,400.00', captured.records[0].getMessage())

    def test_configuration(self):
        response = self.client.get(reverse('api_tax_configuration'))
        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['cess_rate'], 0.04)
        self.assertEqual(data['regimes']['new']['slabs'][1]['range_min'], 300001)
        self.assertIsNone(data['regimes']['old']['slabs'][-1]['range_max'])

    def test_surcharge_rate(self):
        response = self.client.get(reverse('api_surcharge_rate'), {'income': 60000000, 'regime': 'new'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['rate'], 0.25)

        response = self.client.get(reverse('api_surcharge_rate'), {'income': 60000000})
        self.assertEqual(response.json()['rate'], 0.37)

    def test_surcharge_rate_requires_income(self):
        response = self.client.get(reverse('api_surcharge_rate'))
        self.assertEqual(response.status_code, 400)

    def test_health_check(self):
        response = self.client.get(reverse('api_health'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'healthy')
