"""
Service-layer exceptions that map to HTTP statuses DRF has no built-in for.

Services otherwise raise Django's own exceptions:
    ValidationError   -> 400
    PermissionDenied  -> 403
    Http404           -> 404
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class ConflictError(APIException):
    """A uniqueness rule was violated (duplicate name, code, email...)."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'
