from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from decimal import Decimal
import uuid


class Purchase(models.Model):
    """Inventory purchase: brownies acquired for resale."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner (NULL for legacy records not yet claimed by an account)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='purchases'
    )

    # Purchase details
    date = models.DateField()
    quantity = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    total_value = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal('0.00'))]
    )
    supplier = models.CharField(max_length=200, blank=True)
    notes = models.TextField(blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'purchases'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='purchases_owner_created_idx'),
            models.Index(fields=['owner', 'date'], name='purchases_owner_date_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        supplier = self.supplier or 'Unknown supplier'
        return f"{self.quantity} brownies - {self.total_value} ({supplier})"

    @property
    def unit_cost(self):
        """Cost of a single brownie in this purchase."""
        return self.total_value / self.quantity
