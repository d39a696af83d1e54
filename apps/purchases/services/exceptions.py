"""Domain-specific exceptions for purchases services."""


class PurchasesServiceError(Exception):
    """Base exception for purchases services."""
    pass


class PurchaseNotFoundError(PurchasesServiceError):
    """Raised when a purchase does not exist for the given owner."""
    pass


class InvalidPurchaseError(PurchasesServiceError):
    """Raised when purchase values break a business rule."""
    pass
