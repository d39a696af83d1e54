import pytest
from decimal import Decimal
from django.urls import reverse
from rest_framework import status


@pytest.mark.django_db
class TestFinancialSummary:
    """Tests for GET /api/analytics/summary/"""

    def test_summary(self, analytics_client, ledger):
        """Figures cover all of the user's records and nothing else."""
        url = reverse('analytics:summary')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.data['total_investment'])) == Decimal('220.00')
        assert Decimal(str(response.data['total_revenue'])) == Decimal('96.00')
        assert Decimal(str(response.data['net_profit'])) == Decimal('-124.00')
        assert Decimal(str(response.data['profit_margin'])) == Decimal('-129.17')
        assert response.data['total_brownies_sold'] == 11
        assert response.data['total_brownies_stock'] == 59
        assert Decimal(str(response.data['average_cost_per_brownie'])) == Decimal('3.14')
        assert Decimal(str(response.data['average_selling_price'])) == Decimal('8.73')

    def test_summary_empty_ledger(self, analytics_client):
        """A new account gets zeros."""
        url = reverse('analytics:summary')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.data['profit_margin'])) == Decimal('0.00')
        assert response.data['total_brownies_stock'] == 0

    def test_summary_unauthenticated(self, api_client):
        """Unauthenticated users cannot see reports."""
        url = reverse('analytics:summary')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestMonthlyReport:
    """Tests for GET /api/analytics/monthly/"""

    def test_monthly_by_period(self, analytics_client, ledger):
        """March 2024 only."""
        url = reverse('analytics:monthly')
        response = analytics_client.get(url, {'period': '2024-03'})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['period_start'] == '2024-03-01'
        assert response.data['period_end'] == '2024-03-31'
        assert Decimal(str(response.data['investment'])) == Decimal('150.00')
        assert Decimal(str(response.data['revenue'])) == Decimal('86.00')
        assert Decimal(str(response.data['profit'])) == Decimal('-64.00')
        assert response.data['brownies_sold'] == 10
        assert response.data['sales_count'] == 3
        assert response.data['purchases_count'] == 1

    def test_monthly_by_date(self, analytics_client, ledger):
        """Any day of April selects April."""
        url = reverse('analytics:monthly')
        response = analytics_client.get(url, {'date': '2024-04-30'})

        assert response.status_code == status.HTTP_200_OK
        assert Decimal(str(response.data['revenue'])) == Decimal('10.00')
        assert response.data['purchases_count'] == 1

    def test_monthly_invalid_period(self, analytics_client):
        url = reverse('analytics:monthly')
        response = analytics_client.get(url, {'period': '2024-13'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'period' in response.data


@pytest.mark.django_db
class TestBreakdowns:
    """Tests for the breakdown endpoints."""

    def test_payment_methods(self, analytics_client, ledger):
        """Revenue per method in first-seen order, newest sale first."""
        url = reverse('analytics:payment-methods')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        rows = {row['method']: row for row in response.data}
        assert [row['method'] for row in response.data] == ['card', 'pix', 'cash']
        assert rows['pix']['label'] == 'PIX'
        assert Decimal(str(rows['pix']['total'])) == Decimal('70.00')
        assert Decimal(str(rows['pix']['percentage'])) == Decimal('72.92')
        assert Decimal(str(rows['cash']['percentage'])) == Decimal('16.67')

    def test_top_customers_case_sensitive(self, analytics_client, ledger):
        """'Ana' and 'ana' are separate entries in the ranking."""
        url = reverse('analytics:top-customers')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [row['name'] for row in response.data] == ['Rui', 'Ana', 'ana']
        assert Decimal(str(response.data[2]['total'])) == Decimal('16.00')

    def test_top_customers_limit(self, analytics_client, ledger):
        url = reverse('analytics:top-customers')
        response = analytics_client.get(url, {'limit': 1})

        assert len(response.data) == 1

    def test_top_customers_invalid_limit(self, analytics_client):
        url = reverse('analytics:top-customers')
        response = analytics_client.get(url, {'limit': 0})

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_brownie_types(self, analytics_client, ledger):
        url = reverse('analytics:brownie-types')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        rows = {row['brownie_type']: row for row in response.data}
        assert rows['doce_de_leite']['quantity'] == 6
        assert rows['ninho']['quantity'] == 5
        assert rows['ninho']['label'] == 'Ninho'
        assert Decimal(str(rows['doce_de_leite']['percentage'])) == Decimal('54.55')


@pytest.mark.django_db
class TestCombinedReports:
    """Tests for the reports and dashboard endpoints."""

    def test_reports(self, analytics_client, ledger):
        """Every section is present and consistent with the summary."""
        url = reverse('analytics:reports')
        response = analytics_client.get(url, {'period': '2024-04', 'limit': 2})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['currency'] == 'BRL'
        assert Decimal(str(response.data['summary']['total_revenue'])) == Decimal('96.00')
        assert Decimal(str(response.data['monthly']['revenue'])) == Decimal('10.00')
        assert len(response.data['top_customers']) == 2
        assert len(response.data['payment_methods']) == 3
        assert len(response.data['brownie_types']) == 2

    def test_dashboard(self, analytics_client, ledger):
        """Customers are counted case-insensitively."""
        url = reverse('analytics:dashboard')
        response = analytics_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['customer_count'] == 2
        assert response.data['summary']['total_brownies_sold'] == 11
