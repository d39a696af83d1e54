from django.conf import settings
from django.db import models
from decimal import Decimal
import uuid


class Customer(models.Model):
    """
    Customer aggregate derived from sales.

    ``total_spent``, ``total_purchases`` and ``last_purchase_date`` always
    equal the reduction over the owner's sales whose customer name matches
    ``name`` case-insensitively. They are written only by the sync service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Owner (NULL for legacy records not yet claimed by an account)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='customers'
    )

    name = models.CharField(max_length=200)

    # Aggregates
    total_spent = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_purchases = models.PositiveIntegerField(default=0)
    last_purchase_date = models.DateField(null=True, blank=True)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'customers'
        indexes = [
            models.Index(fields=['owner', 'created_at'], name='customers_owner_created_idx'),
            models.Index(fields=['owner', 'name'], name='customers_owner_name_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return self.name
