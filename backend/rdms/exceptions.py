"""Error taxonomy shared by all apps and the DRF exception handler.

Services raise plain Django exceptions (``ValidationError``,
``PermissionDenied``, ``ObjectDoesNotExist``) plus the two classes below;
the handler turns all of them into ``{"detail": ..., "status_code": ...}``.
"""
import logging

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions, status
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class AuthenticationRequired(PermissionDenied):
    """No acting user was supplied to an operation that needs one."""

    def __init__(self, message='Authentication required'):
        super().__init__(message)


class BackendError(Exception):
    """Storage or database failure surfaced to the caller without retry."""


class ServiceUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Backend temporarily unavailable.'
    default_code = 'backend_error'


def _validation_detail(exc: DjangoValidationError):
    if hasattr(exc, 'error_dict'):
        return exc.message_dict
    return exc.messages


def custom_exception_handler(exc, context):
    if isinstance(exc, AuthenticationRequired):
        exc = exceptions.NotAuthenticated(str(exc))
    elif isinstance(exc, DjangoValidationError):
        exc = exceptions.ValidationError(_validation_detail(exc))
    elif isinstance(exc, ObjectDoesNotExist):
        exc = exceptions.NotFound(str(exc) or None)
    elif isinstance(exc, BackendError):
        view = context.get('view')
        logger.error('backend error in %s: %s', type(view).__name__ if view else None, exc)
        exc = ServiceUnavailable(str(exc) or None)

    response = exception_handler(exc, context)

    if response is not None:
        if isinstance(response.data, dict):
            response.data['status_code'] = response.status_code
        else:
            response.data = {'detail': response.data, 'status_code': response.status_code}

    return response
