"""Email confirmation service (staff tool)."""

import logging
from typing import Tuple

from django.db import transaction
from django.contrib.auth import get_user_model

from .exceptions import UserNotFoundError

User = get_user_model()
logger = logging.getLogger(__name__)


@transaction.atomic
def confirm_user_email(*, email: str) -> Tuple[User, bool]:
    """
    Mark the email of the account registered with ``email`` as confirmed.

    Args:
        email: Address of the account, compared case-insensitively

    Returns:
        (user, already_confirmed) where already_confirmed tells whether the
        address had been confirmed before this call

    Raises:
        UserNotFoundError: If no account uses that address
    """
    try:
        user = User.objects.select_for_update().get(email__iexact=email)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with email {email} not found")

    already_confirmed = user.email_verified
    user.mark_email_verified()

    if not already_confirmed:
        logger.info("Email confirmed for user %s", user.pk)
    return user, already_confirmed
