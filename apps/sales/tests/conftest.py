import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.sales.services import create_sale


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def sale_owner(db):
    """Create and return the account that records the sales."""
    return User.objects.create_user(
        email='seller@example.com',
        password='TestPass123!',
        display_name='Brownie Seller',
        email_verified=True,
    )


@pytest.fixture
def sale_other_owner(db):
    """Create and return an unrelated account."""
    return User.objects.create_user(
        email='other_seller@example.com',
        password='TestPass123!',
        display_name='Other Seller',
        email_verified=True,
    )


@pytest.fixture
def seller_client(sale_owner):
    """Return API client authenticated as the sale owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(sale_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def other_seller_client(sale_other_owner):
    """Return API client authenticated as the other account."""
    client = APIClient()
    refresh = RefreshToken.for_user(sale_other_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def record_sale(sale_owner):
    """Return a helper that records a sale through the service layer."""
    def _record(customer_name='Maria', quantity=5, unit_price='8.00', owner=None, **extra):
        return create_sale(
            owner=owner or sale_owner,
            date=extra.pop('date', date(2024, 3, 15)),
            customer_name=customer_name,
            quantity=quantity,
            unit_price=Decimal(unit_price),
            **extra,
        )
    return _record


@pytest.fixture
def sale(record_sale):
    """Create and return a sale of 5 brownies at 8.00 to Maria."""
    return record_sale()
