"""Domain-specific exceptions for accounts services."""


class AccountsServiceError(Exception):
    """Base exception for accounts services."""
    pass


class UserRegistrationError(AccountsServiceError):
    """Raised when user registration fails."""
    pass


class InvalidCredentialsError(AccountsServiceError):
    """Raised when authentication credentials are invalid."""
    pass


class InactiveAccountError(AccountsServiceError):
    """Raised when account is deactivated."""
    pass


class UserNotFoundError(AccountsServiceError):
    """Raised when user does not exist."""
    pass


class OwnerRequiredError(AccountsServiceError):
    """
    Raised when a ledger operation is attempted without an authenticated owner.

    Views guard every ledger endpoint with IsAuthenticated, so reaching this
    error means a caller skipped that guard.
    """
    pass
