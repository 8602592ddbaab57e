"""Shared helpers for the resource route tables."""

import logging
from typing import Type

from aiohttp import web

from ..bus.interfaces import MessageBus
from ..models import filters
from ..models.filters import Filter
from ..services.utils import InvalidArgument, format_json_response
from ..urns import ResourceKind, check_filter

logger = logging.getLogger(__name__)

# Bus collaborator injected into the application by create_app()
BUS = web.AppKey("bus", MessageBus)

_LIST_OPERATIONS = {
    ResourceKind.NODES: 'get_nodes',
    ResourceKind.POOLS: 'get_pools',
    ResourceKind.REPLICAS: 'get_replicas',
    ResourceKind.NEXUSES: 'get_nexuses',
    ResourceKind.VOLUMES: 'get_volumes',
}

_GET_OPERATIONS = {
    ResourceKind.NODES: 'get_node',
    ResourceKind.POOLS: 'get_pool',
    ResourceKind.REPLICAS: 'get_replica',
    ResourceKind.NEXUSES: 'get_nexus',
    ResourceKind.VOLUMES: 'get_volume',
}


def bus_of(request: web.Request) -> MessageBus:
    return request.app[BUS]


def path_filter(variant: Type[Filter], request: web.Request) -> Filter:
    """Filter of the given variant built from the path parameters."""
    return filters.build(variant, request.match_info)


async def read_body(request: web.Request, body_cls):
    """Decode the JSON body of request into body_cls."""
    try:
        data = await request.json()
    except ValueError as e:
        raise InvalidArgument(f"Malformed JSON body: {e}") from e
    try:
        return body_cls.from_dict(data)
    except ValueError as e:
        raise InvalidArgument(f"Invalid {body_cls.__name__}: {e}") from e


def list_resources(kind: ResourceKind, variant: Type[Filter]):
    """Handler returning every resource of kind selected by the path filter."""
    operation = _LIST_OPERATIONS[kind]

    async def handler(request):
        filter = path_filter(variant, request)
        check_filter(kind, filter)
        logger.debug(f"{operation}({filter})")
        resources = await getattr(bus_of(request), operation)(filter)
        return format_json_response(resources)

    handler.__name__ = f"list_{kind.value}_by_{variant.__name__.lower()}"
    return handler


def get_resource(kind: ResourceKind, variant: Type[Filter]):
    """Handler returning the single resource of kind selected by the path filter."""
    operation = _GET_OPERATIONS[kind]

    async def handler(request):
        filter = path_filter(variant, request)
        check_filter(kind, filter)
        logger.debug(f"{operation}({filter})")
        resource = await getattr(bus_of(request), operation)(filter)
        return format_json_response(resource)

    handler.__name__ = f"get_{kind.value}_by_{variant.__name__.lower()}"
    return handler
