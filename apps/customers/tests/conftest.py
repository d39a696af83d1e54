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
def customer_owner(db):
    """Create and return the account whose customers are tested."""
    return User.objects.create_user(
        email='shop@example.com',
        password='TestPass123!',
        display_name='Brownie Shop',
        email_verified=True,
    )


@pytest.fixture
def customer_other_owner(db):
    """Create and return an unrelated account."""
    return User.objects.create_user(
        email='other_shop@example.com',
        password='TestPass123!',
        display_name='Other Shop',
        email_verified=True,
    )


@pytest.fixture
def shop_client(customer_owner):
    """Return API client authenticated as the customer owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(customer_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def other_shop_client(customer_other_owner):
    """Return API client authenticated as the other account."""
    client = APIClient()
    refresh = RefreshToken.for_user(customer_other_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def shop_sales(customer_owner):
    """
    Record sales for three customers.

    Maria: 40.00 + 16.00 (as 'maria'), Ana: 30.00, Mariana: 8.00
    """
    def _sale(name, quantity, unit_price, day):
        return create_sale(
            owner=customer_owner,
            date=date(2024, 3, day),
            customer_name=name,
            quantity=quantity,
            unit_price=Decimal(unit_price),
        )

    return [
        _sale('Maria', 5, '8.00', 1),
        _sale('Ana', 3, '10.00', 2),
        _sale('maria', 2, '8.00', 3),
        _sale('Mariana', 1, '8.00', 4),
    ]
