import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.purchases.models import Purchase


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


@pytest.fixture
def purchase_owner(db):
    """Create and return the account that owns the purchases."""
    return User.objects.create_user(
        email='owner@example.com',
        password='TestPass123!',
        display_name='Brownie Owner',
        email_verified=True,
    )


@pytest.fixture
def purchase_other_owner(db):
    """Create and return an unrelated account."""
    return User.objects.create_user(
        email='other_owner@example.com',
        password='TestPass123!',
        display_name='Other Owner',
        email_verified=True,
    )


@pytest.fixture
def owner_client(purchase_owner):
    """Return API client authenticated as the purchase owner."""
    client = APIClient()
    refresh = RefreshToken.for_user(purchase_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def other_owner_client(purchase_other_owner):
    """Return API client authenticated as the other account."""
    client = APIClient()
    refresh = RefreshToken.for_user(purchase_other_owner)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


@pytest.fixture
def purchase(db, purchase_owner):
    """Create and return a purchase of 50 brownies for 150.00."""
    return Purchase.objects.create(
        owner=purchase_owner,
        date=date(2024, 3, 10),
        quantity=50,
        total_value=Decimal('150.00'),
        supplier='Atacado Doce',
    )


@pytest.fixture
def older_purchase(db, purchase_owner):
    """Create and return an earlier purchase of 20 brownies."""
    return Purchase.objects.create(
        owner=purchase_owner,
        date=date(2024, 2, 1),
        quantity=20,
        total_value=Decimal('70.00'),
    )


@pytest.fixture
def legacy_purchase(db):
    """Create and return a purchase without an owner."""
    return Purchase.objects.create(
        owner=None,
        date=date(2023, 12, 5),
        quantity=10,
        total_value=Decimal('30.00'),
    )
