"""
Ledger snapshots.

A LedgerSnapshot is an immutable view of one owner's purchases, sales and
customers, loaded at a single point in time. Report views build one per
request and hand its collections to the pure functions in
``apps.analytics.analytics``.
"""

import logging
from dataclasses import dataclass
from typing import Tuple

from apps.accounts.services.ownership import require_owner
from apps.customers.models import Customer
from apps.purchases.models import Purchase
from apps.sales.models import Sale

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    """One owner's records, each collection newest first."""

    purchases: Tuple[Purchase, ...] = ()
    sales: Tuple[Sale, ...] = ()
    customers: Tuple[Customer, ...] = ()


def load_snapshot(owner) -> LedgerSnapshot:
    """
    Load every record of ``owner``.

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
    """
    require_owner(owner)

    snapshot = LedgerSnapshot(
        purchases=tuple(Purchase.objects.filter(owner=owner).order_by('-created_at')),
        sales=tuple(Sale.objects.filter(owner=owner).order_by('-created_at')),
        customers=tuple(Customer.objects.filter(owner=owner).order_by('-created_at')),
    )
    logger.debug(
        "Loaded snapshot for owner %s: %d purchases, %d sales, %d customers",
        owner.pk, len(snapshot.purchases), len(snapshot.sales), len(snapshot.customers)
    )
    return snapshot
