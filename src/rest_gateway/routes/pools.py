"""Pool routes"""

from ..models import filters
from ..models.requests import CreatePoolBody
from ..services.resolver import resolve_destroy_pool
from ..services.utils import format_empty_response, format_json_response
from ..urns import ResourceKind
from .base import bus_of, get_resource, list_resources, path_filter, read_body


async def put_node_pool(request):
    """Create a pool on a node"""
    body = await read_body(request, CreatePoolBody)
    create = body.bus_request(request.match_info['node_id'], request.match_info['pool_id'])
    pool = await bus_of(request).create_pool(create)
    return format_json_response(pool)


async def del_node_pool(request):
    return await destroy_pool(request, path_filter(filters.NodePool, request))


async def del_pool(request):
    return await destroy_pool(request, path_filter(filters.Pool, request))


async def destroy_pool(request, filter):
    bus = bus_of(request)
    destroy = await resolve_destroy_pool(bus, filter)
    await bus.destroy_pool(destroy)
    return format_empty_response()


ROUTES = [
    ('GET', '/v0/pools', list_resources(ResourceKind.POOLS, filters.All)),
    ('GET', '/v0/pools/{pool_id}', get_resource(ResourceKind.POOLS, filters.Pool)),
    ('GET', '/v0/nodes/{node_id}/pools', list_resources(ResourceKind.POOLS, filters.Node)),
    ('GET', '/v0/nodes/{node_id}/pools/{pool_id}', get_resource(ResourceKind.POOLS, filters.NodePool)),
    ('PUT', '/v0/nodes/{node_id}/pools/{pool_id}', put_node_pool),
    ('DELETE', '/v0/nodes/{node_id}/pools/{pool_id}', del_node_pool),
    ('DELETE', '/v0/pools/{pool_id}', del_pool),
]
