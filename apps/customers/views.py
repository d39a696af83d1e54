from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import (
    CustomerSerializer,
    CustomerDetailSerializer,
    CustomerFilterSerializer,
    CustomerSyncResultSerializer,
)
from .services import (
    list_customers,
    get_customer,
    get_customer_sales,
    sync_customers,
    CustomerNotFoundError,
)


class CustomerPagination(PageNumberPagination):
    """Custom pagination for customers."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class CustomerViewSet(viewsets.ViewSet):
    """
    Read-only access to customers.

    list: Customers sorted by total spent, optionally filtered by name
    retrieve: A customer with their sales
    recompute: Rebuild every customer from the sales
    """

    permission_classes = [IsAuthenticated]
    pagination_class = CustomerPagination
    lookup_value_regex = r'[0-9a-fA-F-]{36}'

    @extend_schema(
        parameters=[
            OpenApiParameter('search', OpenApiTypes.STR, description='Case-insensitive name filter'),
        ],
        responses={200: CustomerSerializer(many=True)},
        tags=['customers'],
    )
    def list(self, request):
        """List customers using service layer."""
        filter_serializer = CustomerFilterSerializer(data=request.query_params)
        filter_serializer.is_valid(raise_exception=True)

        customers = list_customers(
            owner=request.user,
            search=filter_serializer.validated_data['search'],
        )

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(customers, request, view=self)
        if page is not None:
            serializer = CustomerSerializer(page, many=True)
            return paginator.get_paginated_response(serializer.data)

        serializer = CustomerSerializer(customers, many=True)
        return Response(serializer.data)

    @extend_schema(responses={200: CustomerDetailSerializer}, tags=['customers'])
    def retrieve(self, request, pk=None):
        """Get customer details with their sales."""
        try:
            customer = get_customer(owner=request.user, customer_id=pk)
        except CustomerNotFoundError as e:
            return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

        sales = get_customer_sales(owner=request.user, customer=customer)
        serializer = CustomerDetailSerializer(customer, context={'sales': sales})
        return Response(serializer.data)

    @extend_schema(request=None, responses={200: CustomerSyncResultSerializer}, tags=['customers'])
    @action(detail=False, methods=['post'])
    def recompute(self, request):
        """
        Rebuild all customers from the current sales.

        POST /api/customers/recompute/
        """
        result = sync_customers(owner=request.user)
        return Response(CustomerSyncResultSerializer(result).data)
