from django.conf import settings
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .analytics import (
    compute_financial_summary,
    monthly_rollup,
    payment_method_breakdown,
    top_customers,
    brownie_type_breakdown,
)
from .snapshot import load_snapshot
from .serializers import (
    # Input serializers
    MonthlyQuerySerializer,
    TopCustomersQuerySerializer,
    # Response serializers
    FinancialSummarySerializer,
    MonthlyRollupSerializer,
    PaymentMethodShareSerializer,
    CustomerTotalSerializer,
    BrownieTypeShareSerializer,
    ReportsResponseSerializer,
    DashboardResponseSerializer,
)


MONTH_PARAMETERS = [
    OpenApiParameter('period', OpenApiTypes.STR, description='Month period (YYYY-MM)'),
    OpenApiParameter('date', OpenApiTypes.DATE, description='Any day of the month (YYYY-MM-DD)'),
]


@extend_schema(
    responses={200: FinancialSummarySerializer},
    description="Get investment, revenue, profit, margin, stock and average prices.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def financial_summary(request):
    """Financial summary over all of the user's records - thin HTTP handler."""
    snapshot = load_snapshot(request.user)
    summary = compute_financial_summary(snapshot.purchases, snapshot.sales)
    return Response(FinancialSummarySerializer(summary).data)


@extend_schema(
    parameters=MONTH_PARAMETERS,
    responses={200: MonthlyRollupSerializer},
    description="Get the figures of one calendar month (current month by default).",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def monthly_report(request):
    """Monthly rollup - thin HTTP handler."""
    query_serializer = MonthlyQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    snapshot = load_snapshot(request.user)
    rollup = monthly_rollup(snapshot.purchases, snapshot.sales, params['reference_date'])
    return Response(MonthlyRollupSerializer(rollup).data)


@extend_schema(
    responses={200: PaymentMethodShareSerializer(many=True)},
    description="Get revenue per payment method with its share of total revenue.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def payment_methods(request):
    """Payment method breakdown - thin HTTP handler."""
    snapshot = load_snapshot(request.user)
    summary = compute_financial_summary(snapshot.purchases, snapshot.sales)
    shares = payment_method_breakdown(snapshot.sales, summary.total_revenue)
    return Response(PaymentMethodShareSerializer(shares, many=True).data)


@extend_schema(
    parameters=[
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of results'),
    ],
    responses={200: CustomerTotalSerializer(many=True)},
    description="Get customer names ranked by the total value of their sales.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def top_customers_report(request):
    """Top customers - thin HTTP handler."""
    query_serializer = TopCustomersQuerySerializer(data=request.query_params)
    query_serializer.is_valid(raise_exception=True)
    params = query_serializer.validated_data

    snapshot = load_snapshot(request.user)
    ranking = top_customers(snapshot.sales, limit=params['limit'])
    return Response(CustomerTotalSerializer(ranking, many=True).data)


@extend_schema(
    responses={200: BrownieTypeShareSerializer(many=True)},
    description="Get brownies sold per type with its share of all brownies sold.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def brownie_types(request):
    """Brownie type breakdown - thin HTTP handler."""
    snapshot = load_snapshot(request.user)
    shares = brownie_type_breakdown(snapshot.sales)
    return Response(BrownieTypeShareSerializer(shares, many=True).data)


@extend_schema(
    parameters=MONTH_PARAMETERS + [
        OpenApiParameter('limit', OpenApiTypes.INT, description='Number of top customers'),
    ],
    responses={200: ReportsResponseSerializer},
    description="Get every report section computed from one snapshot.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def reports(request):
    """All report sections in one response."""
    month_serializer = MonthlyQuerySerializer(data=request.query_params)
    month_serializer.is_valid(raise_exception=True)
    limit_serializer = TopCustomersQuerySerializer(data=request.query_params)
    limit_serializer.is_valid(raise_exception=True)

    snapshot = load_snapshot(request.user)
    summary = compute_financial_summary(snapshot.purchases, snapshot.sales)

    data = {
        'currency': settings.LEDGER_CURRENCY,
        'summary': summary,
        'monthly': monthly_rollup(
            snapshot.purchases,
            snapshot.sales,
            month_serializer.validated_data['reference_date'],
        ),
        'payment_methods': payment_method_breakdown(snapshot.sales, summary.total_revenue),
        'top_customers': top_customers(snapshot.sales, limit=limit_serializer.validated_data['limit']),
        'brownie_types': brownie_type_breakdown(snapshot.sales),
    }
    return Response(ReportsResponseSerializer(data).data)


@extend_schema(
    responses={200: DashboardResponseSerializer},
    description="Get dashboard summary: financial figures and number of customers.",
    tags=['analytics'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def dashboard(request):
    """Dashboard summary - thin HTTP handler."""
    snapshot = load_snapshot(request.user)

    data = {
        'currency': settings.LEDGER_CURRENCY,
        'summary': compute_financial_summary(snapshot.purchases, snapshot.sales),
        'customer_count': len(snapshot.customers),
    }
    return Response(DashboardResponseSerializer(data).data)
