import pytest
from decimal import Decimal
from datetime import date
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken
from apps.accounts.models import User
from apps.purchases.services import create_purchase
from apps.sales.services import create_sale


@pytest.fixture
def api_client():
    """Return an unauthenticated API client."""
    return APIClient()


# =============================================================================
# Users
# =============================================================================

@pytest.fixture
def analytics_user(db):
    """Create the main analytics test user."""
    return User.objects.create_user(
        email='analytics_user@example.com',
        password='TestPass123!',
        display_name='Analytics User',
        email_verified=True,
    )


@pytest.fixture
def analytics_other_user(db):
    """Create a user whose records must never leak into reports."""
    return User.objects.create_user(
        email='analytics_other@example.com',
        password='TestPass123!',
        display_name='Analytics Other',
        email_verified=True,
    )


@pytest.fixture
def analytics_client(analytics_user):
    """Return API client authenticated as the analytics user."""
    client = APIClient()
    refresh = RefreshToken.for_user(analytics_user)
    client.credentials(HTTP_AUTHORIZATION=f'Bearer {refresh.access_token}')
    return client


# =============================================================================
# Records
# =============================================================================

@pytest.fixture
def ledger(analytics_user, analytics_other_user):
    """
    Record a small ledger for the analytics user.

    March 2024: purchase 50 for 150.00; sales Ana 5 x 8.00 (pix, doce de
    leite), ana 2 x 8.00 (cash, ninho), Rui 3 x 10.00 (pix, ninho).
    April 2024: purchase 20 for 70.00; sale Rui 1 x 10.00 (card).
    The other user has one sale that must not show up.
    """
    create_purchase(owner=analytics_user, date=date(2024, 3, 1), quantity=50, total_value=Decimal('150.00'))
    create_purchase(owner=analytics_user, date=date(2024, 4, 2), quantity=20, total_value=Decimal('70.00'))

    def _sale(name, quantity, unit_price, day, payment_method, brownie_type, owner=analytics_user):
        return create_sale(
            owner=owner,
            date=day,
            customer_name=name,
            quantity=quantity,
            unit_price=Decimal(unit_price),
            payment_method=payment_method,
            brownie_type=brownie_type,
        )

    _sale('Ana', 5, '8.00', date(2024, 3, 5), 'pix', 'doce_de_leite')
    _sale('ana', 2, '8.00', date(2024, 3, 12), 'cash', 'ninho')
    _sale('Rui', 3, '10.00', date(2024, 3, 20), 'pix', 'ninho')
    _sale('Rui', 1, '10.00', date(2024, 4, 3), 'card', 'doce_de_leite')
    _sale('Zeca', 100, '10.00', date(2024, 3, 5), 'pix', 'ninho', owner=analytics_other_user)
