"""
Analytics Module
=================

Pure aggregation functions behind the dashboard and the reports. They derive
financial summaries from purchases and sales, and customer aggregates from
sales.

Nothing in this module touches the database. Every function takes plain
sequences of records and returns new values, so any object exposing the
expected attributes works: Django model instances, or the lightweight
records used in the tests.

Record attributes used:
    Purchase: ``date``, ``quantity``, ``total_value``
    Sale: ``date``, ``customer_name``, ``quantity``, ``total_value``,
    ``payment_method``, ``brownie_type``
    Customer: ``name``, ``total_spent``, ``total_purchases``,
    ``last_purchase_date``

Example:
    Building the dashboard numbers::

        from apps.analytics.analytics import compute_financial_summary

        summary = compute_financial_summary(purchases, sales)
        print(f"Profit: {summary.net_profit} ({summary.profit_margin}%)")

Note:
    The aggregation functions are total over well-typed input. Empty
    collections yield zeros, never a division error.
"""

import calendar
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from .exceptions import InvalidPeriodError

ZERO = Decimal('0.00')
HUNDRED = Decimal('100')


# =============================================================================
# Result types
# =============================================================================

@dataclass(frozen=True)
class FinancialSummary:
    """Derived snapshot of business health. Never persisted."""

    total_investment: Decimal = ZERO
    total_revenue: Decimal = ZERO
    net_profit: Decimal = ZERO
    profit_margin: Decimal = ZERO
    total_brownies_sold: int = 0
    total_brownies_stock: int = 0
    average_cost_per_brownie: Decimal = ZERO
    average_selling_price: Decimal = ZERO


@dataclass(frozen=True)
class MonthlyRollup:
    """Summary figures restricted to one calendar month."""

    period_start: date
    period_end: date
    investment: Decimal = ZERO
    revenue: Decimal = ZERO
    profit: Decimal = ZERO
    brownies_sold: int = 0
    sales_count: int = 0
    purchases_count: int = 0


@dataclass(frozen=True)
class PaymentMethodShare:
    method: str
    total: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class BrownieTypeShare:
    brownie_type: str
    quantity: int
    percentage: Decimal


@dataclass(frozen=True)
class CustomerTotal:
    """One row of the top customers report."""

    name: str
    total: Decimal


@dataclass(frozen=True)
class CustomerTotals:
    """
    Customer aggregate derived from that customer's sales.

    ``id`` and ``created_at`` are carried through untouched so that rows
    loaded from the database keep their identity after an update.
    """

    name: str
    total_spent: Decimal = ZERO
    total_purchases: int = 0
    last_purchase_date: Optional[date] = None
    id: Optional[object] = field(default=None, compare=False)
    created_at: Optional[datetime] = field(default=None, compare=False)

    @property
    def key(self) -> str:
        return customer_key(self.name)


# =============================================================================
# Helpers
# =============================================================================

def customer_key(name: str) -> str:
    """Case-insensitive matching key for a customer name."""
    return name.casefold()


def percentage(part, whole) -> Decimal:
    """Return ``part / whole * 100``, or zero when ``whole`` is zero."""
    whole = Decimal(whole)
    if whole <= 0:
        return ZERO
    return Decimal(part) / whole * HUNDRED


def month_bounds(reference_date) -> tuple[date, date]:
    """First and last calendar day of the month containing ``reference_date``."""
    if isinstance(reference_date, datetime):
        reference_date = reference_date.date()
    last_day = calendar.monthrange(reference_date.year, reference_date.month)[1]
    return reference_date.replace(day=1), reference_date.replace(day=last_day)


def parse_period(period: str) -> date:
    """
    First day of a month given as ``YYYY-MM``.

    Raises:
        InvalidPeriodError: If ``period`` is not a valid year and month
    """
    try:
        year, month = (int(part) for part in period.split('-'))
        return date(year, month, 1)
    except (ValueError, TypeError, AttributeError):
        raise InvalidPeriodError("Invalid period format. Use YYYY-MM")


# =============================================================================
# Financial summary
# =============================================================================

def compute_financial_summary(purchases: Iterable, sales: Iterable) -> FinancialSummary:
    """
    Reduce purchases and sales into a FinancialSummary.

    Formulas:
        - total_investment = sum of purchase totals
        - total_revenue = sum of sale totals
        - net_profit = total_revenue - total_investment
        - profit_margin = net_profit / total_revenue * 100 (0 without revenue)
        - total_brownies_stock = max(0, purchased - sold)
        - average_cost_per_brownie = total_investment / purchased (0 if none)
        - average_selling_price = total_revenue / sold (0 if none)

    Args:
        purchases: Purchase records.
        sales: Sale records.

    Returns:
        FinancialSummary: The derived figures. Calling this twice on the same
        records yields equal results.

    Example:
        >>> summary = compute_financial_summary(
        ...     [Purchase(quantity=50, total_value=Decimal('150.00'))],
        ...     [Sale(quantity=5, unit_price=Decimal('8.00'), total_value=Decimal('40.00'))],
        ... )
        >>> summary.net_profit, summary.profit_margin
        (Decimal('-110.00'), Decimal('-275.00'))
    """
    purchases = list(purchases)
    sales = list(sales)

    total_investment = sum((p.total_value for p in purchases), ZERO)
    total_revenue = sum((s.total_value for s in sales), ZERO)
    net_profit = total_revenue - total_investment

    total_purchased = sum(p.quantity for p in purchases)
    total_sold = sum(s.quantity for s in sales)

    return FinancialSummary(
        total_investment=total_investment,
        total_revenue=total_revenue,
        net_profit=net_profit,
        profit_margin=percentage(net_profit, total_revenue),
        total_brownies_sold=total_sold,
        total_brownies_stock=max(0, total_purchased - total_sold),
        average_cost_per_brownie=(
            total_investment / total_purchased if total_purchased > 0 else ZERO
        ),
        average_selling_price=(
            total_revenue / total_sold if total_sold > 0 else ZERO
        ),
    )


def monthly_rollup(purchases: Iterable, sales: Iterable, reference_date) -> MonthlyRollup:
    """
    Summarise the calendar month that contains ``reference_date``.

    Records are selected by their own calendar date, from the first to the
    last day of the month, both inclusive. The figures are those of
    compute_financial_summary applied to that subset.
    """
    start, end = month_bounds(reference_date)

    month_purchases = [p for p in purchases if start <= p.date <= end]
    month_sales = [s for s in sales if start <= s.date <= end]
    summary = compute_financial_summary(month_purchases, month_sales)

    return MonthlyRollup(
        period_start=start,
        period_end=end,
        investment=summary.total_investment,
        revenue=summary.total_revenue,
        profit=summary.net_profit,
        brownies_sold=summary.total_brownies_sold,
        sales_count=len(month_sales),
        purchases_count=len(month_purchases),
    )


# =============================================================================
# Report breakdowns
# =============================================================================

def payment_method_breakdown(sales: Iterable, total_revenue) -> list[PaymentMethodShare]:
    """
    Group sale totals by payment method.

    Methods appear in the order they are first seen. The percentage is
    relative to ``total_revenue`` and is 0 when there is no revenue.
    """
    totals: dict[str, Decimal] = {}
    for sale in sales:
        totals[sale.payment_method] = totals.get(sale.payment_method, ZERO) + sale.total_value

    return [
        PaymentMethodShare(
            method=method,
            total=total,
            percentage=percentage(total, total_revenue),
        )
        for method, total in totals.items()
    ]


def top_customers(sales: Iterable, limit: int = 5) -> list[CustomerTotal]:
    """
    Rank customer names by the total value of their sales.

    Names are grouped by their exact spelling, so "Ana" and "ana" are two
    separate entries here even though they are one Customer record.
    Ties keep the order in which the names first appeared.
    """
    totals: dict[str, Decimal] = {}
    for sale in sales:
        totals[sale.customer_name] = totals.get(sale.customer_name, ZERO) + sale.total_value

    ranked = sorted(
        (CustomerTotal(name=name, total=total) for name, total in totals.items()),
        key=lambda entry: entry.total,
        reverse=True,
    )
    return ranked[:limit]


def brownie_type_breakdown(sales: Iterable) -> list[BrownieTypeShare]:
    """Quantity sold per brownie type, with its share of all brownies sold."""
    quantities: dict[str, int] = {}
    for sale in sales:
        quantities[sale.brownie_type] = quantities.get(sale.brownie_type, 0) + sale.quantity

    total = sum(quantities.values())
    return [
        BrownieTypeShare(
            brownie_type=brownie_type,
            quantity=quantity,
            percentage=percentage(quantity, total),
        )
        for brownie_type, quantity in quantities.items()
    ]


# =============================================================================
# Customers
# =============================================================================

def upsert_customer_on_sale(customers: Sequence[CustomerTotals], sale) -> list[CustomerTotals]:
    """
    Apply one sale to the customer list.

    The sale's customer name is matched case-insensitively against existing
    customers. A match gets the sale total added, its purchase count
    incremented and ``last_purchase_date`` set to the sale date. The date is
    overwritten even if it is older than the stored one: the field tracks the
    most recently recorded sale, not the latest calendar date.

    Without a match a new customer seeded from the sale is put first.

    Args:
        customers: Current customer aggregates. Not modified.
        sale: The sale being recorded.

    Returns:
        list[CustomerTotals]: A new list with the sale applied.
    """
    key = customer_key(sale.customer_name)
    updated = []
    matched = False

    for customer in customers:
        if not matched and customer.key == key:
            customer = replace(
                customer,
                total_spent=customer.total_spent + sale.total_value,
                total_purchases=customer.total_purchases + 1,
                last_purchase_date=sale.date,
            )
            matched = True
        updated.append(customer)

    if not matched:
        updated.insert(0, CustomerTotals(
            name=sale.customer_name,
            total_spent=sale.total_value,
            total_purchases=1,
            last_purchase_date=sale.date,
        ))

    return updated


def recompute_customers(sales: Iterable) -> list[CustomerTotals]:
    """
    Rebuild every customer aggregate from scratch.

    Folds upsert_customer_on_sale over ``sales``, which must be given in the
    order they were recorded (oldest first). The result therefore equals the
    incremental updates a fresh ledger would have seen, and it stays correct
    after sales are edited or deleted. Cost is O(len(sales)).
    """
    customers: list[CustomerTotals] = []
    for sale in sales:
        customers = upsert_customer_on_sale(customers, sale)
    return customers


def filter_and_sort_customers(customers: Iterable, query: str = '') -> list:
    """
    Search customers by name and order them by total spent.

    Matching is a case-insensitive substring test; an empty query keeps every
    customer. Customers with equal totals keep their input order.
    """
    needle = customer_key(query or '')
    matches = [c for c in customers if needle in customer_key(c.name)]
    return sorted(matches, key=lambda c: c.total_spent, reverse=True)


def customer_sales(sales: Iterable, name: str) -> list:
    """Sales recorded under ``name``, compared case-insensitively."""
    key = customer_key(name)
    return [s for s in sales if customer_key(s.customer_name) == key]
