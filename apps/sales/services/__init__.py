"""Services for sales business logic."""

from .exceptions import (
    SalesServiceError,
    SaleNotFoundError,
    InvalidSaleError,
)
from .sale_management import (
    compute_total,
    create_sale,
    list_sales,
    get_sale,
    update_sale,
    delete_sale,
)

__all__ = [
    # Exceptions
    'SalesServiceError',
    'SaleNotFoundError',
    'InvalidSaleError',
    # Sale management
    'compute_total',
    'create_sale',
    'list_sales',
    'get_sale',
    'update_sale',
    'delete_sale',
]
