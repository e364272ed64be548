"""
Error taxonomy shared by every app.

ValidationError (400) and NotFoundError (404) are raised by services; any
database failure escaping a view is reported as StorageError (503), which
callers treat as transient and retry on their next polling cycle.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

__all__ = ['ValidationError', 'NotFoundError', 'StorageError', 'Conflict', 'chatroom_exception_handler']


class NotFoundError(NotFound):
    default_detail = 'Referenced resource does not exist.'
    default_code = 'not_found'


class StorageError(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = 'Storage is temporarily unavailable, retry on the next polling cycle.'
    default_code = 'storage_unavailable'


class Conflict(APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


def chatroom_exception_handler(exc, context):
    """DRF exception handler that maps database failures onto StorageError."""
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(f"Storage failure in {view.__class__.__name__ if view else 'unknown view'}: {exc}")
        exc = StorageError()

    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, StorageError):
        response['Retry-After'] = '1'
    return response
