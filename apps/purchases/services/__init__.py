"""Services for purchases business logic."""

from .exceptions import (
    PurchasesServiceError,
    PurchaseNotFoundError,
    InvalidPurchaseError,
)
from .purchase_management import (
    create_purchase,
    list_purchases,
    get_purchase,
    update_purchase,
    delete_purchase,
)

__all__ = [
    # Exceptions
    'PurchasesServiceError',
    'PurchaseNotFoundError',
    'InvalidPurchaseError',
    # Purchase management
    'create_purchase',
    'list_purchases',
    'get_purchase',
    'update_purchase',
    'delete_purchase',
]
