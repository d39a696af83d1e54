from rest_framework import viewsets
from rest_framework.exceptions import ValidationError
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import PurchaseSerializer, PurchaseFilterSerializer
from .services import (
    create_purchase,
    list_purchases,
    update_purchase,
    delete_purchase,
    InvalidPurchaseError,
)


class PurchasePagination(PageNumberPagination):
    """Custom pagination for purchases."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


@extend_schema_view(
    list=extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE, description='Purchases on or after this date'),
            OpenApiParameter('date_to', OpenApiTypes.DATE, description='Purchases on or before this date'),
        ],
        tags=['purchases'],
    ),
)
class PurchaseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Purchase CRUD operations.

    list: Get the current user's purchases, newest first
    create: Record a new purchase
    retrieve: Get a specific purchase
    update: Update a purchase
    partial_update: Partially update a purchase
    destroy: Delete a purchase
    """

    serializer_class = PurchaseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = PurchasePagination

    def get_queryset(self):
        """Owner-scoped purchases, filtered by validated query parameters."""
        if self.action != 'list':
            return list_purchases(owner=self.request.user)

        filter_serializer = PurchaseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        return list_purchases(
            owner=self.request.user,
            date_from=params.get('date_from'),
            date_to=params.get('date_to'),
        )

    def perform_create(self, serializer):
        """Create purchase using service layer."""
        try:
            purchase = create_purchase(
                owner=self.request.user,
                date=serializer.validated_data['date'],
                quantity=serializer.validated_data['quantity'],
                total_value=serializer.validated_data['total_value'],
                supplier=serializer.validated_data.get('supplier', ''),
                notes=serializer.validated_data.get('notes', ''),
            )
        except InvalidPurchaseError as e:
            raise ValidationError(str(e))

        serializer.instance = purchase

    def perform_update(self, serializer):
        """Update purchase using service layer."""
        try:
            purchase = update_purchase(
                owner=self.request.user,
                purchase_id=serializer.instance.id,
                **serializer.validated_data,
            )
        except InvalidPurchaseError as e:
            raise ValidationError(str(e))

        serializer.instance = purchase

    def perform_destroy(self, instance):
        """Delete purchase using service layer."""
        delete_purchase(owner=self.request.user, purchase_id=instance.id)
