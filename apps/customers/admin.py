from django.contrib import admin
from django.contrib.auth import get_user_model
from .models import Customer
from .services import sync_customers


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """
    Admin interface for Customers.

    Aggregates are read-only here: they are rebuilt from sales, either
    automatically or through the recompute action.
    """

    list_display = [
        'name',
        'owner',
        'total_spent',
        'total_purchases',
        'last_purchase_date',
        'created_at',
    ]
    list_filter = ['last_purchase_date', 'created_at']
    search_fields = ['name', 'owner__email']
    readonly_fields = [
        'total_spent',
        'total_purchases',
        'last_purchase_date',
        'created_at',
        'updated_at',
    ]
    ordering = ['-total_spent']
    actions = ['recompute_customers']

    @admin.action(description='Recompute customers of the selected owners')
    def recompute_customers(self, request, queryset):
        """Rebuild every customer of each owner found in the selection."""
        owner_ids = queryset.exclude(owner=None).values_list('owner', flat=True).distinct()
        owners = get_user_model().objects.filter(id__in=owner_ids)
        for owner in owners:
            sync_customers(owner=owner)
        self.message_user(request, f'Recomputed customers for {owners.count()} owner(s).')

    def has_add_permission(self, request):
        """Customers are created from sales, not by hand."""
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('owner')
