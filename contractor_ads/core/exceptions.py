"""Error taxonomy for the service.

Each error knows the HTTP status it maps to; the exception handlers in
``contractor_ads.main`` render them as ``{"error": message, **extra}``.
"""
from typing import Any, Dict

from fastapi import status


class ServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra

    def to_content(self) -> Dict[str, Any]:
        return {"error": self.message, **self.extra}


class ValidationError(ServiceError):
    """Malformed or missing required input."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class AuthError(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized", **extra: Any):
        super().__init__(message, **extra)


class StorageError(ServiceError):
    """Any failure of the backing store."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


# Message constants shared by the services and the tests
AD_ERRORS = {
    'AD_NOT_FOUND': 'Ad not found',
    'MISSING_SERVICE_TYPE': 'Missing metadata.service_type',
    'INVALID_METADATA': 'metadata is not valid JSON',
    'METADATA_NOT_OBJECT': 'metadata must be a JSON object',
    'INVALID_FIELDS': 'Invalid ad fields: {details}',
    'NO_VALID_FIELDS': 'No valid fields to update',
    'NON_FINITE_NUMBER': 'Numbers must be finite (NaN and Infinity are not allowed)',
}
