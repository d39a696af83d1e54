from rest_framework import status, serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated, IsAdminUser
from rest_framework.response import Response
from rest_framework_simplejwt.tokens import RefreshToken
from drf_spectacular.utils import extend_schema
from .serializers import (
    UserRegistrationSerializer,
    UserLoginSerializer,
    UserSerializer,
    ConfirmEmailSerializer,
    LegacyStatusSerializer,
    LegacyClaimResultSerializer,
    LegacyReleaseResultSerializer,
)
from .services import (
    register_user,
    authenticate_user,
    confirm_user_email,
    legacy_data_status,
    claim_legacy_records,
    release_owned_records,
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    UserNotFoundError,
)
from apps.customers.services import CustomerTotalTooLargeError


# Response serializers for API documentation
class TokensResponseSerializer(serializers.Serializer):
    refresh = serializers.CharField()
    access = serializers.CharField()


class AuthResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    user = UserSerializer()
    tokens = TokensResponseSerializer()


class ConfirmEmailResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
    already_confirmed = serializers.BooleanField()
    confirmed_at = serializers.DateTimeField(allow_null=True)


class ErrorResponseSerializer(serializers.Serializer):
    error = serializers.CharField()


def _tokens_for(user):
    refresh = RefreshToken.for_user(user)
    return {
        'refresh': str(refresh),
        'access': str(refresh.access_token),
    }


@extend_schema(
    request=UserRegistrationSerializer,
    responses={
        201: AuthResponseSerializer,
        400: ErrorResponseSerializer,
    },
    description="Register a new user account and receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def register(request):
    """Register a new user account."""
    serializer = UserRegistrationSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    # Remove password_confirm before passing to service
    data = serializer.validated_data.copy()
    data.pop('password_confirm', None)

    try:
        user = register_user(**data)
    except UserRegistrationError as e:
        return Response(
            {'error': str(e)},
            status=status.HTTP_400_BAD_REQUEST
        )

    return Response({
        'message': 'Registration successful.',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    }, status=status.HTTP_201_CREATED)


@extend_schema(
    request=UserLoginSerializer,
    responses={
        200: AuthResponseSerializer,
        400: ErrorResponseSerializer,
        401: ErrorResponseSerializer,
        403: ErrorResponseSerializer,
    },
    description="Authenticate with email and password to receive JWT tokens.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([AllowAny])
def login(request):
    """Login with email and password."""
    serializer = UserLoginSerializer(data=request.data)

    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    try:
        user = authenticate_user(
            email=serializer.validated_data['email'],
            password=serializer.validated_data['password'],
        )
    except InvalidCredentialsError:
        return Response({
            'error': 'Invalid credentials'
        }, status=status.HTTP_401_UNAUTHORIZED)
    except InactiveAccountError as e:
        return Response({
            'error': str(e)
        }, status=status.HTTP_403_FORBIDDEN)

    return Response({
        'message': 'Login successful',
        'user': UserSerializer(user).data,
        'tokens': _tokens_for(user),
    })


@extend_schema(
    responses={200: UserSerializer},
    description="Get the current authenticated user's profile.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def get_current_user(request):
    """Get current authenticated user profile."""
    return Response(UserSerializer(request.user).data)


@extend_schema(
    request=ConfirmEmailSerializer,
    responses={
        200: ConfirmEmailResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Staff only: mark the email of an account as confirmed.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAdminUser])
def confirm_email(request):
    """Confirm a user's email address by email."""
    serializer = ConfirmEmailSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    email = serializer.validated_data['email']

    try:
        user, already_confirmed = confirm_user_email(email=email)
    except UserNotFoundError as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)

    if already_confirmed:
        message = f'Email {user.email} is already confirmed'
    else:
        message = f'Email {user.email} confirmed'

    return Response(ConfirmEmailResponseSerializer({
        'message': message,
        'already_confirmed': already_confirmed,
        'confirmed_at': user.email_verified_at,
    }).data)


@extend_schema(
    responses={200: LegacyStatusSerializer},
    description="Count purchases, sales and customers that belong to no account.",
    tags=['auth'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def legacy_status(request):
    """Legacy record counts."""
    return Response(LegacyStatusSerializer(legacy_data_status()).data)


@extend_schema(
    request=None,
    responses={200: LegacyClaimResultSerializer, 400: ErrorResponseSerializer},
    description="Attach every record without an owner to the current account.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def claim_legacy(request):
    """Claim legacy records for the current user."""
    try:
        result = claim_legacy_records(owner=request.user)
    except CustomerTotalTooLargeError as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)

    return Response(LegacyClaimResultSerializer(result).data)


@extend_schema(
    request=None,
    responses={200: LegacyReleaseResultSerializer},
    description="Detach every record of the current account, turning them into legacy records.",
    tags=['auth'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def release_owned(request):
    """Release the current user's records to the legacy pool."""
    result = release_owned_records(owner=request.user)
    return Response(LegacyReleaseResultSerializer(result).data)
