from rest_framework import serializers
from .models import Customer


class CustomerFilterSerializer(serializers.Serializer):
    """
    Validate query parameters for customer search.

    Query Parameters:
        search (str): Case-insensitive substring of the customer name
    """

    search = serializers.CharField(required=False, allow_blank=True, max_length=200, default='')


class CustomerSerializer(serializers.ModelSerializer):
    """Customer aggregate. Every field is derived from sales."""

    class Meta:
        model = Customer
        fields = [
            'id',
            'name',
            'total_spent',
            'total_purchases',
            'last_purchase_date',
            'created_at',
            'updated_at',
        ]
        read_only_fields = fields


class CustomerDetailSerializer(CustomerSerializer):
    """Customer with their sales and the number of brownies bought."""

    sales = serializers.SerializerMethodField()
    brownies_bought = serializers.SerializerMethodField()

    class Meta(CustomerSerializer.Meta):
        fields = CustomerSerializer.Meta.fields + ['brownies_bought', 'sales']
        read_only_fields = fields

    def get_sales(self, obj):
        from apps.sales.serializers import SaleSerializer
        return SaleSerializer(self.context.get('sales', []), many=True).data

    def get_brownies_bought(self, obj) -> int:
        return sum(sale.quantity for sale in self.context.get('sales', []))


class CustomerSyncResultSerializer(serializers.Serializer):
    created = serializers.IntegerField()
    updated = serializers.IntegerField()
    deleted = serializers.IntegerField()
    total = serializers.IntegerField()
