"""
Sale Services Module
=====================

Record store operations for sales. Every mutation runs in one transaction
together with the refresh of the owner's customers, so customer aggregates
are never observed out of step with the sales they come from.

``total_value`` is always ``quantity * unit_price``. It is computed here on
create and update and stored; reads never recompute it.
"""

import logging
from datetime import date as date_type
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.services.ownership import require_owner
from apps.analytics.analytics import customer_key
from apps.customers.services.customer_sync import sync_customers
from apps.customers.services.exceptions import CustomerTotalTooLargeError
from .exceptions import SaleNotFoundError, InvalidSaleError
from ..models import Sale, PaymentMethod, BrownieType

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
# Sale.total_value is max_digits=12, decimal_places=2
MAX_TOTAL = Decimal('9999999999.99')
EDITABLE_FIELDS = (
    'date',
    'customer_name',
    'quantity',
    'unit_price',
    'payment_method',
    'brownie_type',
    'notes',
)


def compute_total(quantity: int, unit_price: Decimal) -> Decimal:
    """Sale total rounded to cents."""
    return (Decimal(quantity) * Decimal(unit_price)).quantize(CENT, rounding=ROUND_HALF_UP)


def _clean_customer_name(name: str) -> str:
    name = (name or '').strip()
    if not name:
        raise InvalidSaleError("Customer name is required")
    return name


def _validate_values(*, quantity=None, unit_price=None, payment_method=None, brownie_type=None):
    if quantity is not None and quantity < 1:
        raise InvalidSaleError("Quantity must be at least 1")
    if unit_price is not None and unit_price < 0:
        raise InvalidSaleError("Unit price cannot be negative")
    if payment_method is not None and payment_method not in PaymentMethod.values:
        raise InvalidSaleError(f"Unknown payment method: {payment_method}")
    if brownie_type is not None and brownie_type not in BrownieType.values:
        raise InvalidSaleError(f"Unknown brownie type: {brownie_type}")


def _checked_total(quantity: int, unit_price: Decimal) -> Decimal:
    total = compute_total(quantity, unit_price)
    if total > MAX_TOTAL:
        raise InvalidSaleError(f"Sale total {total} exceeds the maximum of {MAX_TOTAL}")
    return total


def _sync_customers(owner):
    try:
        sync_customers(owner=owner)
    except CustomerTotalTooLargeError as e:
        raise InvalidSaleError(str(e))


@transaction.atomic
def create_sale(
    *,
    owner,
    date: date_type,
    customer_name: str,
    quantity: int,
    unit_price: Decimal,
    payment_method: str = PaymentMethod.INSTANT_TRANSFER,
    brownie_type: str = BrownieType.DOCE_DE_LEITE,
    notes: str = ''
) -> Sale:
    """
    Record a sale and fold it into the owner's customers.

    Args:
        owner: Account the sale belongs to
        date: Calendar date of the sale
        customer_name: Buyer; matched to customers case-insensitively
        quantity: Brownies sold (>= 1)
        unit_price: Price per brownie (>= 0)
        payment_method: One of PaymentMethod (default PIX)
        brownie_type: One of BrownieType
        notes: Optional free text

    Returns:
        Created Sale instance

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
        InvalidSaleError: If a value breaks a business rule
    """
    require_owner(owner)
    customer_name = _clean_customer_name(customer_name)
    _validate_values(
        quantity=quantity,
        unit_price=unit_price,
        payment_method=payment_method,
        brownie_type=brownie_type,
    )

    sale = Sale.objects.create(
        owner=owner,
        date=date,
        customer_name=customer_name,
        quantity=quantity,
        unit_price=unit_price,
        total_value=_checked_total(quantity, unit_price),
        payment_method=payment_method,
        brownie_type=brownie_type,
        notes=notes,
    )
    _sync_customers(owner)

    logger.info("Sale %s created for owner %s (%s)", sale.id, owner.pk, sale.total_value)
    return sale


def list_sales(
    *,
    owner,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None,
    customer: Optional[str] = None,
    payment_method: Optional[str] = None,
    brownie_type: Optional[str] = None
) -> QuerySet:
    """
    Return an owner's sales ordered by creation time, newest first.

    Args:
        owner: Account whose sales to list
        date_from: Optional inclusive lower bound on the sale date
        date_to: Optional inclusive upper bound on the sale date
        customer: Optional case-insensitive substring of the customer name
        payment_method: Optional exact payment method
        brownie_type: Optional exact brownie type
    """
    require_owner(owner)
    queryset = Sale.objects.filter(owner=owner)

    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)
    if customer:
        # icontains is ASCII-only on SQLite; match names with casefold instead
        needle = customer_key(customer)
        matching_ids = [
            sale_id
            for sale_id, name in queryset.values_list('id', 'customer_name')
            if needle in customer_key(name)
        ]
        queryset = queryset.filter(id__in=matching_ids)
    if payment_method:
        queryset = queryset.filter(payment_method=payment_method)
    if brownie_type:
        queryset = queryset.filter(brownie_type=brownie_type)

    return queryset.order_by('-created_at')


def get_sale(*, owner, sale_id: UUID) -> Sale:
    """
    Fetch one of the owner's sales.

    Raises:
        SaleNotFoundError: If no such sale belongs to the owner
    """
    require_owner(owner)
    try:
        return Sale.objects.get(id=sale_id, owner=owner)
    except Sale.DoesNotExist:
        raise SaleNotFoundError("Sale not found")


@transaction.atomic
def update_sale(*, owner, sale_id: UUID, **fields) -> Sale:
    """
    Edit a sale and rebuild the owner's customers.

    ``total_value`` is recomputed from the resulting quantity and unit
    price. Renaming the customer moves the sale between customers.

    Raises:
        SaleNotFoundError: If no such sale belongs to the owner
        InvalidSaleError: If an unknown field or an invalid value is given
    """
    require_owner(owner)

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidSaleError(f"Cannot update fields: {', '.join(sorted(unknown))}")
    if 'customer_name' in fields:
        fields['customer_name'] = _clean_customer_name(fields['customer_name'])
    _validate_values(
        quantity=fields.get('quantity'),
        unit_price=fields.get('unit_price'),
        payment_method=fields.get('payment_method'),
        brownie_type=fields.get('brownie_type'),
    )

    try:
        sale = Sale.objects.select_for_update().get(id=sale_id, owner=owner)
    except Sale.DoesNotExist:
        raise SaleNotFoundError("Sale not found")

    for name, value in fields.items():
        setattr(sale, name, value)
    sale.total_value = _checked_total(sale.quantity, sale.unit_price)
    sale.save(update_fields=[*fields, 'total_value', 'updated_at'])

    _sync_customers(owner)

    logger.info("Sale %s updated (%s)", sale.id, ', '.join(sorted(fields)) or 'no fields')
    return sale


@transaction.atomic
def delete_sale(*, owner, sale_id: UUID) -> None:
    """
    Delete a sale and rebuild the owner's customers.

    A customer whose last sale is deleted disappears.

    Raises:
        SaleNotFoundError: If no such sale belongs to the owner
    """
    require_owner(owner)
    deleted, _ = Sale.objects.filter(id=sale_id, owner=owner).delete()
    if not deleted:
        raise SaleNotFoundError("Sale not found")

    sync_customers(owner=owner)

    logger.info("Sale %s deleted for owner %s", sale_id, owner.pk)
