"""
Keep persisted customers equal to the aggregates derived from sales.

The derivation itself lives in the analytics engine
(``recompute_customers``); this module loads the owner's sales, runs it and
writes the result back, keeping the identity of customers that survive.
"""

import logging
from decimal import Decimal

from django.db import transaction

from apps.accounts.services.ownership import require_owner
from apps.analytics.analytics import recompute_customers, customer_key
from apps.sales.models import Sale
from .exceptions import CustomerTotalTooLargeError
from ..models import Customer

logger = logging.getLogger(__name__)

# Customer.total_spent is max_digits=12, decimal_places=2
MAX_TOTAL_SPENT = Decimal('9999999999.99')


@transaction.atomic
def sync_customers(*, owner) -> dict:
    """
    Recompute an owner's customers from their sales and persist the result.

    Existing rows are matched to recomputed aggregates by case-insensitive
    name. A matched row keeps its ``id`` and ``created_at`` and takes the new
    totals and the spelling of the earliest remaining sale. Aggregates with
    no row are created; rows whose customer has no sales left are deleted.

    Runs inside the caller's transaction when there is one, so a sale
    mutation and the customer refresh commit together.

    Args:
        owner: Account whose customers to rebuild

    Returns:
        dict with ``created``, ``updated``, ``deleted`` and ``total`` counts

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
        CustomerTotalTooLargeError: If a total spent exceeds MAX_TOTAL_SPENT;
            nothing is written
    """
    require_owner(owner)

    sales = Sale.objects.filter(owner=owner).order_by('created_at', 'id')
    aggregates = recompute_customers(sales)

    for aggregate in aggregates:
        if aggregate.total_spent > MAX_TOTAL_SPENT:
            raise CustomerTotalTooLargeError(
                f"Total spent by {aggregate.name} would exceed {MAX_TOTAL_SPENT}"
            )

    rows_by_key = {}
    for row in Customer.objects.select_for_update().filter(owner=owner).order_by('created_at'):
        rows_by_key.setdefault(customer_key(row.name), []).append(row)

    keep_ids = []
    created = updated = 0

    for aggregate in aggregates:
        rows = rows_by_key.get(aggregate.key)
        if not rows:
            customer = Customer.objects.create(
                owner=owner,
                name=aggregate.name,
                total_spent=aggregate.total_spent,
                total_purchases=aggregate.total_purchases,
                last_purchase_date=aggregate.last_purchase_date,
            )
            keep_ids.append(customer.id)
            created += 1
            continue

        customer = rows.pop(0)
        keep_ids.append(customer.id)
        values = {
            'name': aggregate.name,
            'total_spent': aggregate.total_spent,
            'total_purchases': aggregate.total_purchases,
            'last_purchase_date': aggregate.last_purchase_date,
        }
        changed = [field for field, value in values.items() if getattr(customer, field) != value]
        if changed:
            for field in changed:
                setattr(customer, field, values[field])
            customer.save(update_fields=[*changed, 'updated_at'])
            updated += 1

    deleted, _ = Customer.objects.filter(owner=owner).exclude(id__in=keep_ids).delete()

    logger.info(
        "Customers synced for owner %s: %d created, %d updated, %d deleted",
        owner.pk, created, updated, deleted
    )
    return {
        'created': created,
        'updated': updated,
        'deleted': deleted,
        'total': len(keep_ids),
    }
