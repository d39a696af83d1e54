"""
Serializers for analytics app.

This module contains:
1. Input serializers - Query parameter validation
2. Response serializers - API documentation and output formatting

Input Serializers:
    MonthlyQuerySerializer - Validates the month selection
    TopCustomersQuerySerializer - Validates top customers parameters

Response Serializers:
    FinancialSummarySerializer - Dashboard figures
    MonthlyRollupSerializer - One calendar month
    PaymentMethodShareSerializer - Revenue per payment method
    CustomerTotalSerializer - Top customers ranking entry
    BrownieTypeShareSerializer - Quantity per brownie type
    ReportsResponseSerializer - Every report section together
    DashboardResponseSerializer - Summary with customer count
"""

from django.conf import settings
from django.utils import timezone
from rest_framework import serializers

from .analytics import parse_period
from .exceptions import InvalidPeriodError


MONEY = {'max_digits': 20, 'decimal_places': 2}


# =============================================================================
# Input Serializers (Query Parameter Validation)
# =============================================================================

class MonthlyQuerySerializer(serializers.Serializer):
    """
    Validate month selection query parameters.

    Used by: monthly_report, reports

    Query Parameters:
        period (str): Month in YYYY-MM format (e.g., '2024-03')
        date (date): Any day of the month

    Note:
        'period' takes precedence over 'date'. Without either, the current
        month is used. The resolved day is returned as 'reference_date'.
    """

    period = serializers.RegexField(
        regex=r'^\d{4}-(0[1-9]|1[0-2])$',
        required=False,
        allow_blank=True,
        help_text='Month period in YYYY-MM format'
    )
    date = serializers.DateField(required=False)

    def validate(self, attrs):
        """Resolve the reference date."""
        period = attrs.get('period')

        if period:
            try:
                attrs['reference_date'] = parse_period(period)
            except InvalidPeriodError as e:
                raise serializers.ValidationError({'period': str(e)})
        else:
            attrs['reference_date'] = attrs.get('date') or timezone.localdate()

        return attrs


class TopCustomersQuerySerializer(serializers.Serializer):
    """
    Validate query parameters for top customers endpoint.

    Query Parameters:
        limit (int): Number of results to return (1-100)
    """

    limit = serializers.IntegerField(
        min_value=1,
        max_value=100,
        required=False,
        help_text='Number of results (1-100)'
    )

    def validate(self, attrs):
        attrs.setdefault('limit', settings.LEDGER_TOP_CUSTOMERS_LIMIT)
        return attrs


# =============================================================================
# Response Serializers (API Documentation)
# =============================================================================

class FinancialSummarySerializer(serializers.Serializer):
    """Response serializer for the financial summary."""
    total_investment = serializers.DecimalField(**MONEY)
    total_revenue = serializers.DecimalField(**MONEY)
    net_profit = serializers.DecimalField(**MONEY)
    profit_margin = serializers.DecimalField(**MONEY)
    total_brownies_sold = serializers.IntegerField()
    total_brownies_stock = serializers.IntegerField()
    average_cost_per_brownie = serializers.DecimalField(**MONEY)
    average_selling_price = serializers.DecimalField(**MONEY)


class MonthlyRollupSerializer(serializers.Serializer):
    """Response serializer for one calendar month."""
    period_start = serializers.DateField()
    period_end = serializers.DateField()
    investment = serializers.DecimalField(**MONEY)
    revenue = serializers.DecimalField(**MONEY)
    profit = serializers.DecimalField(**MONEY)
    brownies_sold = serializers.IntegerField()
    sales_count = serializers.IntegerField()
    purchases_count = serializers.IntegerField()


class PaymentMethodShareSerializer(serializers.Serializer):
    """Nested serializer for revenue per payment method."""
    method = serializers.CharField()
    label = serializers.SerializerMethodField()
    total = serializers.DecimalField(**MONEY)
    percentage = serializers.DecimalField(**MONEY)

    def get_label(self, obj) -> str:
        from apps.sales.models import PaymentMethod
        return dict(PaymentMethod.choices).get(obj.method, obj.method.capitalize())


class CustomerTotalSerializer(serializers.Serializer):
    """Nested serializer for a top customers entry."""
    name = serializers.CharField()
    total = serializers.DecimalField(**MONEY)


class BrownieTypeShareSerializer(serializers.Serializer):
    """Nested serializer for quantity per brownie type."""
    brownie_type = serializers.CharField()
    label = serializers.SerializerMethodField()
    quantity = serializers.IntegerField()
    percentage = serializers.DecimalField(**MONEY)

    def get_label(self, obj) -> str:
        from apps.sales.models import BrownieType
        return dict(BrownieType.choices).get(obj.brownie_type, obj.brownie_type)


class ReportsResponseSerializer(serializers.Serializer):
    """Response serializer for the combined reports."""
    currency = serializers.CharField()
    summary = FinancialSummarySerializer()
    monthly = MonthlyRollupSerializer()
    payment_methods = PaymentMethodShareSerializer(many=True)
    top_customers = CustomerTotalSerializer(many=True)
    brownie_types = BrownieTypeShareSerializer(many=True)


class DashboardResponseSerializer(serializers.Serializer):
    """Response serializer for dashboard summary."""
    currency = serializers.CharField()
    summary = FinancialSummarySerializer()
    customer_count = serializers.IntegerField()
