"""Domain-specific exceptions for sales services."""


class SalesServiceError(Exception):
    """Base exception for sales services."""
    pass


class SaleNotFoundError(SalesServiceError):
    """Raised when a sale does not exist for the given owner."""
    pass


class InvalidSaleError(SalesServiceError):
    """Raised when sale values break a business rule."""
    pass
