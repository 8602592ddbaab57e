"""Utility modules for the REST gateway."""

from .response import (
    format_json_response,
    format_empty_response,
    format_error_response
)

from .serializers import JSONEncoder, dumps

from .errors import (
    RestError,
    InvalidArgument,
    error_response,
    error_middleware
)

__all__ = [
    # Response formatting
    'format_json_response',
    'format_empty_response',
    'format_error_response',

    # Serialization
    'JSONEncoder',
    'dumps',

    # Error handling
    'RestError',
    'InvalidArgument',
    'error_response',
    'error_middleware'
]
