"""
Engine exceptions and the custom exception handler for consistent API responses
"""
from rest_framework.views import exception_handler
from rest_framework.response import Response
from rest_framework import status
import logging

logger = logging.getLogger(__name__)


class EngineError(Exception):
    """Base class for all membership engine errors"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = 'engine_error'
    default_message = 'Membership engine error'

    def __init__(self, message=None, **details):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class NotFoundError(EngineError):
    """The user has no membership row"""
    status_code = status.HTTP_404_NOT_FOUND
    code = 'not_found'
    default_message = 'Membership not found'


class QuotaExhaustedError(EngineError):
    """No invites remaining this month"""
    status_code = status.HTTP_403_FORBIDDEN
    code = 'quota_exhausted'
    default_message = 'No invites remaining this month'


class ConcurrencyConflictError(EngineError):
    """Transaction could not be serialized; safe to retry with backoff"""
    status_code = status.HTTP_409_CONFLICT
    code = 'concurrency_conflict'
    default_message = 'Concurrent update conflict, please retry'


class ValidationError(EngineError):
    """Malformed input, e.g. a negative bottle count"""
    status_code = status.HTTP_400_BAD_REQUEST
    code = 'validation_error'
    default_message = 'Invalid input'


class StorageError(EngineError):
    """Underlying persistence failure"""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = 'storage_error'
    default_message = 'Storage unavailable'


def custom_exception_handler(exc, context):
    """
    Custom exception handler that returns consistent error responses
    """
    if isinstance(exc, EngineError):
        if exc.status_code >= 500:
            logger.error(f"Engine fault: {exc}", exc_info=True)
        else:
            logger.info(f"Engine rejected request: {exc.code} - {exc}")

        errors = {'type': exc.code}
        if exc.details:
            errors.update(exc.details)
        return Response({
            'code': exc.status_code,
            'msg': exc.message,
            'errors': errors,
        }, status=exc.status_code)

    # Call REST framework's default exception handler first
    response = exception_handler(exc, context)

    if response is not None:
        # Log the exception
        logger.error(f"API Exception: {exc}", exc_info=True)

        # Create custom error response format
        custom_response_data = {
            'code': response.status_code,
            'msg': 'An error occurred',
            'errors': response.data
        }

        # Handle specific error types
        if response.status_code == status.HTTP_400_BAD_REQUEST:
            custom_response_data['msg'] = 'Validation error'
        elif response.status_code == status.HTTP_401_UNAUTHORIZED:
            custom_response_data['msg'] = 'Authentication required'
        elif response.status_code == status.HTTP_403_FORBIDDEN:
            custom_response_data['msg'] = 'Permission denied'
        elif response.status_code == status.HTTP_404_NOT_FOUND:
            custom_response_data['msg'] = 'Resource not found'
        elif response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            custom_response_data['msg'] = 'Method not allowed'
        elif response.status_code >= 500:
            custom_response_data['msg'] = 'Internal server error'
            # Don't expose internal errors in production
            if not hasattr(context['request'], 'user') or not context['request'].user.is_staff:
                custom_response_data['errors'] = {'detail': 'Internal server error'}

        response.data = custom_response_data

    return response
