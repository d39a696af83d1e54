"""Owner scoping for ledger records."""

from .exceptions import OwnerRequiredError


def require_owner(owner):
    """
    Return ``owner`` if it is an authenticated account.

    Every purchase, sale and customer belongs to exactly one account. Service
    functions call this before touching the record store.

    Raises:
        OwnerRequiredError: If owner is missing or anonymous
    """
    if owner is None or not getattr(owner, 'is_authenticated', False):
        raise OwnerRequiredError("An authenticated owner is required for this operation")
    return owner
