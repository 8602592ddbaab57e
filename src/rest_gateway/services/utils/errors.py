"""Translation of handler errors into HTTP responses.

Bus errors map as follows:

* ``NotFound`` -> 204 with an empty body, whatever the operation. Missing
  resources are not treated as client errors by this API and clients rely
  on it.
* ``NotUnique`` -> 500 ``{"error": "NotUnique", "message": ...}``
* ``MessageBusError`` -> 500 ``{"error": <source kind>, "message": <cause chain>}``

Addressing errors (``InvalidFilter``) and malformed requests are 400s.
"""

import json
import logging

from aiohttp import web

from ...bus.errors import BusError, MessageBusError, NotFound, NotUnique
from ...models.filters import InvalidFilter
from ..metrics import ERROR_COUNT
from .response import format_empty_response, format_error_response

logger = logging.getLogger(__name__)


class RestError(Exception):
    """Base class for errors raised by the request handlers themselves."""
    status = 500
    code = 'Internal'

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class InvalidArgument(RestError):
    """Malformed body or path argument."""
    status = 400
    code = 'InvalidArgument'


def error_response(error: Exception) -> web.Response:
    """HTTP response for an error raised while serving a request."""
    if isinstance(error, NotFound):
        ERROR_COUNT.labels(kind=error.kind).inc()
        return format_empty_response(204)

    if isinstance(error, NotUnique):
        code, message, status = error.kind, error.message, 500
    elif isinstance(error, MessageBusError):
        code, message, status = error.source_kind, error.full_string(), 500
    elif isinstance(error, InvalidFilter):
        code, message, status = 'InvalidFilter', str(error), 400
    elif isinstance(error, RestError):
        code, message, status = error.code, error.message, error.status
    else:
        code, message, status = 'Internal', str(error) or type(error).__name__, 500

    ERROR_COUNT.labels(kind=code).inc()
    if status >= 500:
        logger.error(f"Got error: {json.dumps({'error': code, 'message': message})}")
    else:
        logger.warning(f"Rejected request: {code}: {message}")
    return format_error_response(code, message, status)


@web.middleware
async def error_middleware(request, handler):
    """Middleware translating every handler error into a JSON response"""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except (BusError, InvalidFilter, RestError) as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Unexpected error in {request.method} {request.path}: {str(e)}")
        return error_response(e)
