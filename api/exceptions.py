"""
Custom Exception Handler for API

Every error leaves the API as {"error": "<message>"}, with "details" for
serializer errors and "retryAfter" when a rate limit is hit.
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import exceptions, status
import logging

from apps.core.exceptions import StoreException
from apps.core.throttling import RateLimitExceeded

logger = logging.getLogger(__name__)

DEFAULT_THROTTLE_MESSAGE = "Too many requests. Please try again later."


def first_error_message(detail) -> str:
    """Dig the first human-readable message out of a DRF error structure."""
    if isinstance(detail, dict):
        for value in detail.values():
            return first_error_message(value)
        return "Invalid request"
    if isinstance(detail, (list, tuple)):
        return first_error_message(detail[0]) if detail else "Invalid request"
    return str(detail)


def _throttled_response(exc: exceptions.Throttled, response: Response) -> Response:
    retry_after = int(exc.wait or 0)
    if isinstance(exc, RateLimitExceeded):
        result = exc.result
        response.data = {"error": result.message, "retryAfter": result.retry_after}
        response['Retry-After'] = str(result.retry_after)
        response['X-RateLimit-Limit'] = str(result.limit)
        response['X-RateLimit-Remaining'] = '0'
        response['X-RateLimit-Reset'] = str(int(result.reset_time * 1000))
    else:
        response.data = {"error": DEFAULT_THROTTLE_MESSAGE, "retryAfter": retry_after}
    return response


def custom_exception_handler(exc, context):
    """
    Custom exception handler that provides consistent error responses.
    """
    if isinstance(exc, StoreException):
        if exc.status_code >= 500:
            logger.error(f"{exc.code}: {exc.message}")
        return Response({"error": exc.message}, status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(exc, exceptions.Throttled):
            return _throttled_response(exc, response)

        if isinstance(exc, exceptions.NotAuthenticated):
            response.data = {"error": "Unauthorized"}
        elif isinstance(exc, exceptions.ValidationError):
            response.data = {
                "error": first_error_message(exc.detail),
                "details": exc.detail,
            }
        else:
            response.data = {"error": first_error_message(getattr(exc, 'detail', str(exc)))}
    else:
        # Handle unexpected exceptions
        logger.exception(f"Unhandled exception: {exc}")
        response = Response(
            {"error": str(exc) or "Internal server error"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR
        )

    return response
