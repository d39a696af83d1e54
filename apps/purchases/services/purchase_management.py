"""
Purchase Services Module
=========================

Record store operations for inventory purchases. Every function is scoped to
a single owner: a purchase that belongs to another account behaves exactly
like a purchase that does not exist.

Functions:
    create_purchase: Insert a purchase for an owner.
    list_purchases: All of an owner's purchases, newest first.
    get_purchase: One purchase by id.
    update_purchase: Edit fields of a purchase.
    delete_purchase: Remove a purchase.

Example:
    Recording a purchase::

        from apps.purchases.services import create_purchase
        from decimal import Decimal

        purchase = create_purchase(
            owner=request.user,
            date=date.today(),
            quantity=50,
            total_value=Decimal('150.00'),
            supplier='Atacado Doce',
        )
"""

import logging
from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet

from apps.accounts.services.ownership import require_owner
from .exceptions import PurchaseNotFoundError, InvalidPurchaseError
from ..models import Purchase

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('date', 'quantity', 'total_value', 'supplier', 'notes')


def _validate_values(quantity, total_value):
    if quantity is not None and quantity < 1:
        raise InvalidPurchaseError("Quantity must be at least 1")
    if total_value is not None and total_value < 0:
        raise InvalidPurchaseError("Total value cannot be negative")


@transaction.atomic
def create_purchase(
    *,
    owner,
    date: date_type,
    quantity: int,
    total_value: Decimal,
    supplier: str = '',
    notes: str = ''
) -> Purchase:
    """
    Record a new purchase.

    Args:
        owner: Account the purchase belongs to
        date: Calendar date of the purchase
        quantity: Number of brownies acquired (>= 1)
        total_value: Amount paid (>= 0)
        supplier: Optional supplier name
        notes: Optional free text

    Returns:
        Created Purchase instance

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
        InvalidPurchaseError: If quantity or total value is out of range
    """
    require_owner(owner)
    _validate_values(quantity, total_value)

    purchase = Purchase.objects.create(
        owner=owner,
        date=date,
        quantity=quantity,
        total_value=total_value,
        supplier=supplier,
        notes=notes,
    )
    logger.info("Purchase %s created for owner %s", purchase.id, owner.pk)
    return purchase


def list_purchases(
    *,
    owner,
    date_from: Optional[date_type] = None,
    date_to: Optional[date_type] = None
) -> QuerySet:
    """
    Return an owner's purchases ordered by creation time, newest first.

    Args:
        owner: Account whose purchases to list
        date_from: Optional inclusive lower bound on the purchase date
        date_to: Optional inclusive upper bound on the purchase date
    """
    require_owner(owner)
    queryset = Purchase.objects.filter(owner=owner)

    if date_from:
        queryset = queryset.filter(date__gte=date_from)
    if date_to:
        queryset = queryset.filter(date__lte=date_to)

    return queryset.order_by('-created_at')


def get_purchase(*, owner, purchase_id: UUID) -> Purchase:
    """
    Fetch one of the owner's purchases.

    Raises:
        PurchaseNotFoundError: If no such purchase belongs to the owner
    """
    require_owner(owner)
    try:
        return Purchase.objects.get(id=purchase_id, owner=owner)
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError("Purchase not found")


@transaction.atomic
def update_purchase(*, owner, purchase_id: UUID, **fields) -> Purchase:
    """
    Edit a purchase.

    Only date, quantity, total_value, supplier and notes can change;
    ``created_at`` is immutable.

    Raises:
        PurchaseNotFoundError: If no such purchase belongs to the owner
        InvalidPurchaseError: If an unknown field or an invalid value is given
    """
    require_owner(owner)

    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise InvalidPurchaseError(f"Cannot update fields: {', '.join(sorted(unknown))}")
    _validate_values(fields.get('quantity'), fields.get('total_value'))

    try:
        purchase = Purchase.objects.select_for_update().get(id=purchase_id, owner=owner)
    except Purchase.DoesNotExist:
        raise PurchaseNotFoundError("Purchase not found")

    for name, value in fields.items():
        setattr(purchase, name, value)
    purchase.save(update_fields=[*fields, 'updated_at'])

    logger.info("Purchase %s updated (%s)", purchase.id, ', '.join(sorted(fields)) or 'no fields')
    return purchase


@transaction.atomic
def delete_purchase(*, owner, purchase_id: UUID) -> None:
    """
    Delete a purchase.

    Raises:
        PurchaseNotFoundError: If no such purchase belongs to the owner
    """
    require_owner(owner)
    deleted, _ = Purchase.objects.filter(id=purchase_id, owner=owner).delete()
    if not deleted:
        raise PurchaseNotFoundError("Purchase not found")

    logger.info("Purchase %s deleted for owner %s", purchase_id, owner.pk)
