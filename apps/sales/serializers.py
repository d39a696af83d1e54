from rest_framework import serializers
from .models import Sale, PaymentMethod, BrownieType


# =============================================================================
# Input Serializers
# =============================================================================

class SaleFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for sale filtering.

    Query Parameters:
        date_from (date): Filter sales from this date
        date_to (date): Filter sales to this date
        customer (str): Case-insensitive part of the customer name
        payment_method (str): Filter by payment method
        brownie_type (str): Filter by brownie type
    """

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)
    customer = serializers.CharField(required=False, allow_blank=True, max_length=200)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices, required=False)
    brownie_type = serializers.ChoiceField(choices=BrownieType.choices, required=False)

    def validate(self, attrs):
        """Validate date range."""
        date_from = attrs.get('date_from')
        date_to = attrs.get('date_to')

        if date_from and date_to:
            if date_from > date_to:
                raise serializers.ValidationError({
                    'date_to': 'End date must be after start date'
                })

        return attrs


# =============================================================================
# Output Serializers
# =============================================================================

class SaleSerializer(serializers.ModelSerializer):
    """Main serializer for sales. ``total_value`` is computed, never written."""

    payment_method_display = serializers.CharField(source='get_payment_method_display', read_only=True)
    brownie_type_display = serializers.CharField(source='get_brownie_type_display', read_only=True)

    class Meta:
        model = Sale
        fields = [
            'id',
            'date',
            'customer_name',
            'quantity',
            'unit_price',
            'total_value',
            'payment_method',
            'payment_method_display',
            'brownie_type',
            'brownie_type_display',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'total_value', 'created_at', 'updated_at']

    def validate_customer_name(self, value):
        """Reject names that are only whitespace."""
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Customer name is required')
        return value
