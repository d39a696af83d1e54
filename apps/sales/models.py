from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class PaymentMethod(models.TextChoices):
    """How a sale was paid."""
    CASH = 'cash', 'Cash'
    INSTANT_TRANSFER = 'pix', 'PIX'
    CARD = 'card', 'Card'
    OTHER = 'other', 'Other'


class BrownieType(models.TextChoices):
    """Brownie flavours on sale."""
    DOCE_DE_LEITE = 'doce_de_leite', 'Doce de leite'
    NINHO = 'ninho', 'Ninho'


class Sale(models.Model):
    """A sale of brownies to a customer."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner (NULL for legacy records not yet claimed by an account)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='sales'
    )

    # Sale details
    date = models.DateField()
    customer_name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    unit_price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    # quantity * unit_price, written by the sales service
    total_value = models.DecimalField(max_digits=12, decimal_places=2)

    payment_method = models.CharField(
        max_length=20,
        choices=PaymentMethod.choices,
        default=PaymentMethod.INSTANT_TRANSFER
    )
    brownie_type = models.CharField(
        max_length=20,
        choices=BrownieType.choices,
        default=BrownieType.DOCE_DE_LEITE
    )
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sales'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='sales_owner_created_idx'),
            models.Index(fields=['owner', 'date'], name='sales_owner_date_idx'),
            models.Index(fields=['owner', 'customer_name'], name='sales_owner_customer_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.customer_name} - {self.quantity} x {self.unit_price}"
