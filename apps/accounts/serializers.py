from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User


class UserSerializer(serializers.ModelSerializer):
    """Basic user serializer for profile display."""

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'display_name',
            'email_verified',
            'email_verified_at',
            'is_staff',
            'created_at',
            'last_login',
        ]
        read_only_fields = fields


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )

    class Meta:
        model = User
        fields = ['email', 'password', 'password_confirm', 'display_name']

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Serializer for user login."""

    email = serializers.EmailField(required=True)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class ConfirmEmailSerializer(serializers.Serializer):
    """Serializer for the staff email confirmation tool."""

    email = serializers.EmailField(required=True)


class LegacyStatusSerializer(serializers.Serializer):
    """Counts of records without an owner."""
    purchases = serializers.IntegerField()
    sales = serializers.IntegerField()
    customers = serializers.IntegerField()
    has_legacy_data = serializers.BooleanField()


class LegacyClaimResultSerializer(serializers.Serializer):
    purchases_migrated = serializers.IntegerField()
    sales_migrated = serializers.IntegerField()
    customers_migrated = serializers.IntegerField()


class LegacyReleaseResultSerializer(serializers.Serializer):
    purchases_released = serializers.IntegerField()
    sales_released = serializers.IntegerField()
    customers_released = serializers.IntegerField()
