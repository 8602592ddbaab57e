"""Message bus collaborator: interface, errors and the in-memory implementation."""

from .errors import (
    BusError,
    NotFound,
    NotUnique,
    MessageBusError,
    TransportError,
    RequestTimeout,
    PublishError,
    ReplyWithError,
    DeserializeError,
    error_chain,
)
from .interfaces import MessageBus, single
from .memory import InMemoryBus

__all__ = [
    'BusError',
    'NotFound',
    'NotUnique',
    'MessageBusError',
    'TransportError',
    'RequestTimeout',
    'PublishError',
    'ReplyWithError',
    'DeserializeError',
    'error_chain',
    'MessageBus',
    'single',
    'InMemoryBus',
]
