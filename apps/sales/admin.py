from django.contrib import admin
from django.utils.html import format_html
from .models import Sale, PaymentMethod


@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    """
    Admin interface for Sales.

    Sales are read-only here. Editing them outside the service layer would
    leave the derived customers stale.
    """

    list_display = [
        'date',
        'customer_name',
        'owner',
        'quantity',
        'unit_price',
        'total_value',
        'payment_method_badge',
        'brownie_type',
        'created_at',
    ]
    list_filter = ['payment_method', 'brownie_type', 'date']
    search_fields = ['customer_name', 'notes', 'owner__email']
    date_hierarchy = 'date'
    ordering = ['-created_at']

    def payment_method_badge(self, obj):
        """Display payment method as colored badge."""
        colors = {
            PaymentMethod.CASH: ('#6B8E5E', 'white'),
            PaymentMethod.INSTANT_TRANSFER: ('#4A7A9B', 'white'),
            PaymentMethod.CARD: ('#A47449', 'white'),
            PaymentMethod.OTHER: ('#ccc', '#666'),
        }
        bg, fg = colors.get(obj.payment_method, ('#ccc', '#666'))
        return format_html(
            '<span style="background: {}; color: {}; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            bg, fg, obj.get_payment_method_display()
        )
    payment_method_badge.short_description = 'Payment'
    payment_method_badge.admin_order_field = 'payment_method'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('owner')
