"""Read access to an owner's customers."""

from typing import List
from uuid import UUID

from apps.accounts.services.ownership import require_owner
from apps.analytics.analytics import filter_and_sort_customers, customer_sales
from apps.sales.models import Sale
from .exceptions import CustomerNotFoundError
from ..models import Customer


def list_customers(*, owner, search: str = '') -> List[Customer]:
    """
    Return an owner's customers matching ``search``, highest spenders first.

    Matching is a case-insensitive substring test on the name; customers
    with equal totals keep their creation order, newest first.
    """
    require_owner(owner)
    customers = Customer.objects.filter(owner=owner).order_by('-created_at')
    return filter_and_sort_customers(customers, search)


def get_customer(*, owner, customer_id: UUID) -> Customer:
    """
    Fetch one of the owner's customers.

    Raises:
        CustomerNotFoundError: If no such customer belongs to the owner
    """
    require_owner(owner)
    try:
        return Customer.objects.get(id=customer_id, owner=owner)
    except Customer.DoesNotExist:
        raise CustomerNotFoundError("Customer not found")


def get_customer_sales(*, owner, customer: Customer) -> list:
    """The owner's sales recorded under the customer's name, newest first."""
    require_owner(owner)
    # iexact is ASCII-only on SQLite; match names with casefold instead
    sales = Sale.objects.filter(owner=owner).order_by('-created_at')
    return customer_sales(sales, customer.name)
