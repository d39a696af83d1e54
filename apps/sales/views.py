from rest_framework import viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import SaleSerializer, SaleFilterSerializer
from .services import (
    create_sale,
    list_sales,
    update_sale,
    delete_sale,
    InvalidSaleError,
)


class SalePagination(PageNumberPagination):
    """Custom pagination for sales."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE, description='Sales on or after this date'),
            OpenApiParameter('date_to', OpenApiTypes.DATE, description='Sales on or before this date'),
            OpenApiParameter('customer', OpenApiTypes.STR, description='Part of the customer name'),
            OpenApiParameter('payment_method', OpenApiTypes.STR, description='cash, pix, card or other'),
            OpenApiParameter('brownie_type', OpenApiTypes.STR, description='doce_de_leite or ninho'),
        ],
        tags=['sales'],
    ),
)
class SaleViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Sale CRUD operations.

    list: Get the current user's sales, newest first
    create: Record a sale (updates the customer)
    retrieve: Get a specific sale
    update: Update a sale (recomputes customers)
    partial_update: Partially update a sale (recomputes customers)
    destroy: Delete a sale (recomputes customers)
    """

    serializer_class = SaleSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = SalePagination

    def get_queryset(self):
        """Owner-scoped sales, filtered by validated query parameters."""
        if self.action != 'list':
            return list_sales(owner=self.request.user)

        filter_serializer = SaleFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_sales(
            owner=self.request.user,
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
            customer=params.get('customer'),
            payment_method=params.get('payment_method'),
            brownie_type=params.get('brownie_type'),
        )

    def perform_create(self, serializer):
        """Create sale using service layer."""
        try:
            sale = create_sale(owner=self.request.user, **serializer.validated_data)
        except InvalidSaleError as e:
            raise ValidationError(str(e))

        serializer.instance = sale

    def perform_update(self, serializer):
        """Update sale using service layer."""
        try:
            sale = update_sale(
                owner=self.request.user,
                sale_id=serializer.instance.id,
                **serializer.validated_data,
            )
        except InvalidSaleError as e:
            raise ValidationError(str(e))

        serializer.instance = sale

    def perform_destroy(self, instance):
        """Delete sale using service layer."""
        delete_sale(owner=self.request.user, sale_id=instance.id)
