"""Services for accounts business logic."""

from .exceptions import (
    AccountsServiceError,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
    OwnerRequiredError,
)
from .ownership import require_owner
from .user_registration import register_user
from .user_authentication import authenticate_user
from .email_confirmation import confirm_user_email
from .legacy_migration import (
    legacy_data_status,
    claim_legacy_records,
    release_owned_records,
)

__all__ = [
    # Exceptions
    'AccountsServiceError',
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'UserNotFoundError',
    'OwnerRequiredError',
    # Services
    'require_owner',
    'register_user',
    'authenticate_user',
    'confirm_user_email',
    'legacy_data_status',
    'claim_legacy_records',
    'release_owned_records',
]
