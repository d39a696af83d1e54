"""Domain-specific exceptions for customers services."""


class CustomersServiceError(Exception):
    """Base exception for customers services."""
    pass


class CustomerNotFoundError(CustomersServiceError):
    """Raised when a customer does not exist for the given owner."""
    pass


class CustomerTotalTooLargeError(CustomersServiceError):
    """Raised when a customer's total spent does not fit the stored amount."""
    pass
