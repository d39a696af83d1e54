"""
Tests for the aggregation functions in apps.analytics.analytics.

These run without a database: records are plain dataclasses exposing the
same attributes as the models.
"""
import pytest
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from apps.analytics.analytics import (
    ZERO,
    CustomerTotals,
    FinancialSummary,
    brownie_type_breakdown,
    compute_financial_summary,
    customer_sales,
    filter_and_sort_customers,
    month_bounds,
    monthly_rollup,
    parse_period,
    payment_method_breakdown,
    percentage,
    recompute_customers,
    top_customers,
    upsert_customer_on_sale,
)
from apps.analytics.exceptions import InvalidPeriodError


@dataclass
class PurchaseRecord:
    quantity: int
    total_value: Decimal
    date: date = date(2024, 3, 10)


@dataclass
class SaleRecord:
    customer_name: str
    quantity: int
    unit_price: Decimal
    date: date = date(2024, 3, 15)
    payment_method: str = 'pix'
    brownie_type: str = 'doce_de_leite'

    @property
    def total_value(self):
        return self.quantity * self.unit_price


def sale(name, quantity, unit_price, **kwargs):
    return SaleRecord(customer_name=name, quantity=quantity, unit_price=Decimal(unit_price), **kwargs)


def purchase(quantity, total_value, **kwargs):
    return PurchaseRecord(quantity=quantity, total_value=Decimal(total_value), **kwargs)


# =============================================================================
# Financial summary
# =============================================================================

class TestComputeFinancialSummary:
    """Tests for compute_financial_summary."""

    def test_single_purchase_and_sale(self):
        """50 bought for 150.00, 5 sold at 8.00."""
        summary = compute_financial_summary([purchase(50, '150.00')], [sale('Maria', 5, '8.00')])

        assert summary.total_investment == Decimal('150.00')
        assert summary.total_revenue == Decimal('40.00')
        assert summary.net_profit == Decimal('-110.00')
        assert summary.profit_margin == Decimal('-275')
        assert summary.total_brownies_sold == 5
        assert summary.total_brownies_stock == 45
        assert summary.average_cost_per_brownie == Decimal('3')
        assert summary.average_selling_price == Decimal('8')

    def test_empty_ledger_is_all_zeros(self):
        """No records, no division errors."""
        assert compute_financial_summary([], []) == FinancialSummary()

    def test_stock_never_negative(self):
        """Selling more than was bought floors stock at zero."""
        summary = compute_financial_summary([purchase(5, '15.00')], [sale('Ana', 8, '8.00')])

        assert summary.total_brownies_stock == 0

    def test_margin_zero_without_revenue(self):
        """Investment only gives a negative profit and a zero margin."""
        summary = compute_financial_summary([purchase(10, '30.00')], [])

        assert summary.net_profit == Decimal('-30.00')
        assert summary.profit_margin == ZERO
        assert summary.average_selling_price == ZERO

    def test_sales_without_purchases(self):
        """Average cost is zero when nothing was bought."""
        summary = compute_financial_summary([], [sale('Ana', 2, '10.00')])

        assert summary.average_cost_per_brownie == ZERO
        assert summary.profit_margin == Decimal('100')

    def test_idempotent(self):
        """Same records, same summary."""
        purchases = [purchase(50, '150.00'), purchase(20, '70.00')]
        sales = [sale('Maria', 5, '8.00'), sale('Ana', 3, '9.50')]

        assert compute_financial_summary(purchases, sales) == compute_financial_summary(purchases, sales)

    def test_accepts_iterators(self):
        """Generators are consumed once but fully."""
        summary = compute_financial_summary(
            (p for p in [purchase(10, '30.00')]),
            (s for s in [sale('Ana', 2, '10.00')]),
        )

        assert summary.total_investment == Decimal('30.00')
        assert summary.total_revenue == Decimal('20.00')


# =============================================================================
# Monthly rollup
# =============================================================================

class TestMonthlyRollup:
    """Tests for monthly_rollup."""

    def test_bounds_are_inclusive(self):
        """First and last day of the month both count."""
        purchases = [
            purchase(10, '30.00', date=date(2024, 1, 31)),
            purchase(20, '60.00', date=date(2024, 2, 1)),
        ]
        sales = [
            sale('Ana', 2, '8.00', date=date(2024, 2, 29)),
            sale('Ana', 3, '8.00', date=date(2024, 3, 1)),
        ]

        rollup = monthly_rollup(purchases, sales, date(2024, 2, 14))

        assert rollup.period_start == date(2024, 2, 1)
        assert rollup.period_end == date(2024, 2, 29)
        assert rollup.investment == Decimal('60.00')
        assert rollup.revenue == Decimal('16.00')
        assert rollup.profit == Decimal('-44.00')
        assert rollup.brownies_sold == 2
        assert rollup.sales_count == 1
        assert rollup.purchases_count == 1

    def test_equals_summary_of_month_subset(self):
        """The rollup matches the summary of the month's records."""
        purchases = [
            purchase(10, '30.00', date=date(2024, 3, 2)),
            purchase(10, '35.00', date=date(2024, 4, 2)),
        ]
        sales = [
            sale('Ana', 2, '8.00', date=date(2024, 3, 5)),
            sale('Rui', 1, '9.00', date=date(2024, 3, 31)),
            sale('Rui', 4, '9.00', date=date(2024, 4, 1)),
        ]

        rollup = monthly_rollup(purchases, sales, date(2024, 3, 20))
        summary = compute_financial_summary(purchases[:1], sales[:2])

        assert rollup.investment == summary.total_investment
        assert rollup.revenue == summary.total_revenue
        assert rollup.profit == summary.net_profit
        assert rollup.brownies_sold == summary.total_brownies_sold

    def test_accepts_datetime_reference(self):
        """A datetime reference selects its calendar month."""
        rollup = monthly_rollup([], [], datetime(2024, 12, 31, 23, 59))

        assert rollup.period_start == date(2024, 12, 1)
        assert rollup.period_end == date(2024, 12, 31)
        assert rollup.revenue == ZERO

    def test_month_bounds_non_leap_february(self):
        """February 2023 ends on the 28th."""
        assert month_bounds(date(2023, 2, 10)) == (date(2023, 2, 1), date(2023, 2, 28))


class TestParsePeriod:
    """Tests for parse_period."""

    def test_valid_period(self):
        assert parse_period('2024-03') == date(2024, 3, 1)

    @pytest.mark.parametrize('value', ['2024-13', '2024', 'abcd-01', '', None])
    def test_invalid_period(self, value):
        with pytest.raises(InvalidPeriodError):
            parse_period(value)


# =============================================================================
# Breakdowns
# =============================================================================

class TestPaymentMethodBreakdown:
    """Tests for payment_method_breakdown."""

    def test_groups_and_percentages(self):
        """Totals per method, in first-seen order, as share of revenue."""
        sales = [
            sale('Ana', 1, '10.00', payment_method='cash'),
            sale('Rui', 3, '10.00', payment_method='pix'),
            sale('Bia', 1, '10.00', payment_method='cash'),
        ]

        shares = payment_method_breakdown(sales, Decimal('50.00'))

        assert [s.method for s in shares] == ['cash', 'pix']
        assert shares[0].total == Decimal('20.00')
        assert shares[0].percentage == Decimal('40')
        assert shares[1].percentage == Decimal('60')

    def test_zero_revenue(self):
        """Percentages are zero when revenue is zero."""
        shares = payment_method_breakdown([sale('Ana', 1, '0.00', payment_method='card')], ZERO)

        assert shares[0].percentage == ZERO

    def test_no_sales(self):
        assert payment_method_breakdown([], ZERO) == []


class TestTopCustomers:
    """Tests for top_customers."""

    def test_ranked_by_total(self):
        """Highest total first, truncated to the limit."""
        sales = [
            sale('Ana', 1, '10.00'),
            sale('Rui', 5, '10.00'),
            sale('Bia', 2, '10.00'),
            sale('Ana', 3, '10.00'),
        ]

        ranking = top_customers(sales, limit=2)

        assert [(c.name, c.total) for c in ranking] == [
            ('Rui', Decimal('50.00')),
            ('Ana', Decimal('40.00')),
        ]

    def test_names_are_case_sensitive(self):
        """'Ana' and 'ana' are ranked separately."""
        sales = [sale('Ana', 3, '10.00'), sale('ana', 1, '10.00')]

        ranking = top_customers(sales)

        assert [c.name for c in ranking] == ['Ana', 'ana']

    def test_ties_keep_first_seen_order(self):
        sales = [sale('Bia', 1, '10.00'), sale('Ana', 1, '10.00')]

        assert [c.name for c in top_customers(sales)] == ['Bia', 'Ana']

    def test_default_limit_is_five(self):
        sales = [sale(f'Customer {i}', 1, '1.00') for i in range(8)]

        assert len(top_customers(sales)) == 5


class TestBrownieTypeBreakdown:
    """Tests for brownie_type_breakdown."""

    def test_quantities_and_percentages(self):
        sales = [
            sale('Ana', 3, '8.00', brownie_type='ninho'),
            sale('Rui', 1, '8.00', brownie_type='doce_de_leite'),
        ]

        shares = brownie_type_breakdown(sales)

        assert [(s.brownie_type, s.quantity, s.percentage) for s in shares] == [
            ('ninho', 3, Decimal('75')),
            ('doce_de_leite', 1, Decimal('25')),
        ]

    def test_no_sales(self):
        assert brownie_type_breakdown([]) == []


def test_percentage_of_zero_whole():
    assert percentage(Decimal('5'), ZERO) == ZERO


# =============================================================================
# Customers
# =============================================================================

class TestUpsertCustomerOnSale:
    """Tests for upsert_customer_on_sale."""

    def test_new_customer_goes_first(self):
        """An unknown name is prepended."""
        customers = [CustomerTotals(name='Ana', total_spent=Decimal('10.00'), total_purchases=1)]

        updated = upsert_customer_on_sale(customers, sale('Rui', 2, '8.00'))

        assert [c.name for c in updated] == ['Rui', 'Ana']
        assert updated[0] == CustomerTotals(
            name='Rui',
            total_spent=Decimal('16.00'),
            total_purchases=1,
            last_purchase_date=date(2024, 3, 15),
        )

    def test_match_is_case_insensitive(self):
        """'maria' updates the existing 'Maria'."""
        customers = upsert_customer_on_sale([], sale('Maria', 5, '8.00'))

        updated = upsert_customer_on_sale(customers, sale('maria', 2, '10.00', date=date(2024, 3, 20)))

        assert len(updated) == 1
        assert updated[0].name == 'Maria'
        assert updated[0].total_spent == Decimal('60.00')
        assert updated[0].total_purchases == 2
        assert updated[0].last_purchase_date == date(2024, 3, 20)

    def test_older_sale_still_sets_last_purchase_date(self):
        """The date follows entry order, not the calendar."""
        customers = upsert_customer_on_sale([], sale('Ana', 1, '8.00', date=date(2024, 3, 20)))

        updated = upsert_customer_on_sale(customers, sale('Ana', 1, '8.00', date=date(2024, 1, 5)))

        assert updated[0].last_purchase_date == date(2024, 1, 5)

    def test_input_not_mutated(self):
        customers = [CustomerTotals(name='Ana', total_spent=Decimal('10.00'), total_purchases=1)]

        upsert_customer_on_sale(customers, sale('Ana', 1, '8.00'))

        assert customers[0].total_spent == Decimal('10.00')
        assert customers[0].total_purchases == 1

    def test_identity_is_carried(self):
        """id and created_at survive an update."""
        created_at = datetime(2024, 1, 1, 12, 0)
        customers = [CustomerTotals(name='Ana', id='abc', created_at=created_at)]

        updated = upsert_customer_on_sale(customers, sale('ANA', 1, '8.00'))

        assert updated[0].id == 'abc'
        assert updated[0].created_at == created_at


class TestRecomputeCustomers:
    """Tests for recompute_customers."""

    def test_equals_incremental_upserts(self):
        sales = [
            sale('Maria', 5, '8.00'),
            sale('Ana', 1, '9.00'),
            sale('maria', 2, '8.00'),
        ]
        incremental = []
        for s in sales:
            incremental = upsert_customer_on_sale(incremental, s)

        assert recompute_customers(sales) == incremental

    def test_after_delete(self):
        """Removing a sale and recomputing gives the reduced totals."""
        sales = [
            sale('Maria', 5, '8.00', date=date(2024, 3, 1)),
            sale('maria', 2, '8.00', date=date(2024, 3, 9)),
            sale('Ana', 1, '9.00'),
        ]

        customers = recompute_customers([sales[0], sales[2]])

        maria = next(c for c in customers if c.key == 'maria')
        assert maria.total_spent == Decimal('40.00')
        assert maria.total_purchases == 1
        assert maria.last_purchase_date == date(2024, 3, 1)

    def test_customer_without_sales_disappears(self):
        assert recompute_customers([]) == []

    def test_name_from_first_sale(self):
        customers = recompute_customers([sale('maria', 1, '8.00'), sale('Maria', 1, '8.00')])

        assert [c.name for c in customers] == ['maria']


class TestFilterAndSortCustomers:
    """Tests for filter_and_sort_customers."""

    customers = [
        CustomerTotals(name='Ana', total_spent=Decimal('30.00')),
        CustomerTotals(name='Maria', total_spent=Decimal('56.00')),
        CustomerTotals(name='Mariana', total_spent=Decimal('30.00')),
    ]

    def test_empty_query_sorts_everything(self):
        result = filter_and_sort_customers(self.customers)

        assert [c.name for c in result] == ['Maria', 'Ana', 'Mariana']

    def test_query_is_case_insensitive_substring(self):
        result = filter_and_sort_customers(self.customers, 'ANA')

        assert [c.name for c in result] == ['Ana', 'Mariana']

    def test_no_match(self):
        assert filter_and_sort_customers(self.customers, 'zzz') == []


def test_customer_sales_matches_any_case():
    sales = [sale('Maria', 1, '8.00'), sale('Ana', 1, '8.00'), sale('MARIA', 2, '8.00')]

    assert [s.quantity for s in customer_sales(sales, 'maria')] == [1, 2]
