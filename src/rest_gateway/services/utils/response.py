"""Response formatting utilities for the REST gateway."""

from aiohttp import web

from .serializers import dumps


def format_json_response(data, status=200):
    """Format an entity, a list of entities or a plain value as JSON.

    Args:
        data: Model, list of models or JSON-compatible value
        status (int): HTTP status code
    """
    return web.json_response(data, status=status, dumps=dumps)


def format_empty_response(status=200):
    """Format an empty JSON value.

    A 204 response carries no body at all; any other status gets ``null``.
    """
    if status == 204:
        return web.Response(status=204, content_type='application/json')
    return web.json_response(None, status=status)


def format_error_response(code, message, status=500):
    """Format an error response.

    Args:
        code (str): Error kind, e.g. NotUnique or the bus transport error kind
        message (str): Human readable error message
        status (int): HTTP status code
    """
    return web.json_response({'error': code, 'message': message}, status=status)
