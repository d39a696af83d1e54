"""Services for customers business logic."""

from .exceptions import (
    CustomersServiceError,
    CustomerNotFoundError,
    CustomerTotalTooLargeError,
)
from .customer_queries import (
    list_customers,
    get_customer,
    get_customer_sales,
)
from .customer_sync import (
    sync_customers,
)

__all__ = [
    # Exceptions
    'CustomersServiceError',
    'CustomerNotFoundError',
    'CustomerTotalTooLargeError',
    # Queries
    'list_customers',
    'get_customer',
    'get_customer_sales',
    # Sync
    'sync_customers',
]
