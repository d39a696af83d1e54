"""
Legacy record migration.

Records created before accounts existed have no owner. An owner can claim
all of them at once, or release everything they own back to the unowned
pool. Both operations are atomic and report how many rows moved.
"""

import logging

from django.db import transaction

from .ownership import require_owner

logger = logging.getLogger(__name__)


def _ledger_models():
    from apps.customers.models import Customer
    from apps.purchases.models import Purchase
    from apps.sales.models import Sale
    return Purchase, Sale, Customer


def legacy_data_status() -> dict:
    """Count the unowned purchases, sales and customers."""
    Purchase, Sale, Customer = _ledger_models()
    counts = {
        'purchases': Purchase.objects.filter(owner__isnull=True).count(),
        'sales': Sale.objects.filter(owner__isnull=True).count(),
        'customers': Customer.objects.filter(owner__isnull=True).count(),
    }
    counts['has_legacy_data'] = any(counts.values())
    return counts


@transaction.atomic
def claim_legacy_records(*, owner) -> dict:
    """
    Attach every unowned record to ``owner``.

    Customers are then rebuilt from the owner's sales, so a legacy customer
    and an owned customer with the same name (ignoring case) end up as one.

    Returns:
        dict with ``purchases_migrated``, ``sales_migrated`` and
        ``customers_migrated``

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
        CustomerTotalTooLargeError: If a merged customer total would not fit;
            no record changes owner
    """
    from apps.customers.services.customer_sync import sync_customers

    require_owner(owner)
    Purchase, Sale, Customer = _ledger_models()

    result = {
        'purchases_migrated': Purchase.objects.filter(owner__isnull=True).update(owner=owner),
        'sales_migrated': Sale.objects.filter(owner__isnull=True).update(owner=owner),
        'customers_migrated': Customer.objects.filter(owner__isnull=True).update(owner=owner),
    }
    sync_customers(owner=owner)

    logger.info(
        "Owner %s claimed legacy records: %d purchases, %d sales, %d customers",
        owner.pk,
        result['purchases_migrated'],
        result['sales_migrated'],
        result['customers_migrated'],
    )
    return result


@transaction.atomic
def release_owned_records(*, owner) -> dict:
    """
    Detach every record of ``owner``, turning them into legacy records.

    Returns:
        dict with ``purchases_released``, ``sales_released`` and
        ``customers_released``

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
    """
    require_owner(owner)
    Purchase, Sale, Customer = _ledger_models()

    result = {
        'purchases_released': Purchase.objects.filter(owner=owner).update(owner=None),
        'sales_released': Sale.objects.filter(owner=owner).update(owner=None),
        'customers_released': Customer.objects.filter(owner=owner).update(owner=None),
    }

    logger.info(
        "Owner %s released records: %d purchases, %d sales, %d customers",
        owner.pk,
        result['purchases_released'],
        result['sales_released'],
        result['customers_released'],
    )
    return result
