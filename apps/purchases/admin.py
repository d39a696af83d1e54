# ==========================================
# apps/purchases/admin.py
# ==========================================

from django.contrib import admin
from django.utils.html import format_html
from .models import Purchase


@admin.register(Purchase)
class PurchaseAdmin(admin.ModelAdmin):
    """
    Admin interface for Purchases.

    Unowned rows are legacy records waiting to be claimed by an account;
    they are flagged in the owner column.
    """

    list_display = [
        'date',
        'get_owner_display',
        'quantity',
        'total_value',
        'get_unit_cost',
        'supplier',
        'created_at',
    ]

    list_filter = [
        'date',
        'created_at',
    ]

    search_fields = [
        'supplier',
        'notes',
        'owner__email',
        'owner__display_name',
    ]

    readonly_fields = [
        'created_at',
        'updated_at',
    ]

    date_hierarchy = 'date'
    ordering = ['-created_at']

    fieldsets = (
        ('Purchase Information', {
            'fields': (
                'owner',
                'date',
                'supplier',
            )
        }),
        ('Financial Details', {
            'fields': (
                'quantity',
                'total_value',
            )
        }),
        ('Notes', {
            'fields': ('notes',),
            'classes': ('collapse',),
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_owner_display(self, obj):
        """Display owner email or a Legacy badge."""
        if obj.owner:
            return obj.owner.email
        return format_html(
            '<span style="background: #E5C49A; color: #2C1810; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">Legacy</span>'
        )
    get_owner_display.short_description = 'Owner'
    get_owner_display.admin_order_field = 'owner__email'

    def get_unit_cost(self, obj):
        return f"{obj.unit_cost:.2f}"
    get_unit_cost.short_description = 'Unit cost'

    def get_queryset(self, request):
        """Optimize query with select_related."""
        qs = super().get_queryset(request)
        return qs.select_related('owner')
