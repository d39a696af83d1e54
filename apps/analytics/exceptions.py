"""
Domain exceptions for analytics app.

These exceptions are raised by the analytics layer for invalid report
parameters, separate from HTTP concerns. Input serializers translate them
into validation errors.

Exception Hierarchy:
    AnalyticsServiceError (base)
    └── InvalidPeriodError

Usage:
    from apps.analytics.exceptions import InvalidPeriodError

    try:
        start = parse_period(value)
    except InvalidPeriodError as e:
        raise serializers.ValidationError({'period': str(e)})
"""


class AnalyticsServiceError(Exception):
    """Base exception for all analytics errors."""

    pass


class InvalidPeriodError(AnalyticsServiceError):
    """
    Raised when a month period cannot be parsed.

    Period must be in YYYY-MM format (e.g., '2024-03').
    """

    pass
