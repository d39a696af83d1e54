from rest_framework import serializers
from .models import Purchase


# =============================================================================
# Input Serializers
# =============================================================================

class PurchaseFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for purchase filtering.

    Query Parameters:
        date_from (date): Filter purchases from this date
        date_to (date): Filter purchases to this date
    """

    date_from = serializers.DateField(required=False)
    date_to = serializers.DateField(required=False)

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

class PurchaseSerializer(serializers.ModelSerializer):
    """Main serializer for purchases."""

    unit_cost = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = Purchase
        fields = [
            'id',
            'date',
            'quantity',
            'total_value',
            'unit_cost',
            'supplier',
            'notes',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'unit_cost', 'created_at', 'updated_at']
