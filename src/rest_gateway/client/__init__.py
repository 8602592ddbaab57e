"""Typed client for the REST gateway."""

from .errors import ClientError, InvalidRequest, ResourceNotFound, ServerError, TransportFailure
from .http import HttpRestClient
from .interfaces import RestClient, as_list

__all__ = [
    'ClientError',
    'InvalidRequest',
    'ResourceNotFound',
    'ServerError',
    'TransportFailure',
    'HttpRestClient',
    'RestClient',
    'as_list',
]
