"""Replica routes

Replicas are created and destroyed under their pool. When the node is left
out of the path it is looked up through the pool first.
"""

from ..models import filters
from ..models.requests import CreateReplicaBody
from ..services.resolver import resolve_destroy_replica, resolve_pool_node
from ..services.utils import format_empty_response, format_json_response
from ..urns import ResourceKind
from .base import bus_of, get_resource, list_resources, path_filter, read_body


async def put_node_pool_replica(request):
    """Create a replica in a pool of a node"""
    body = await read_body(request, CreateReplicaBody)
    return await create_replica(request, request.match_info['node_id'], body)


async def put_pool_replica(request):
    """Create a replica in a pool, wherever the pool lives"""
    body = await read_body(request, CreateReplicaBody)
    node_id = await resolve_pool_node(bus_of(request), request.match_info['pool_id'])
    return await create_replica(request, node_id, body)


async def create_replica(request, node_id, body):
    create = body.bus_request(
        node_id,
        request.match_info['pool_id'],
        request.match_info['replica_id'],
    )
    replica = await bus_of(request).create_replica(create)
    return format_json_response(replica)


async def del_node_pool_replica(request):
    return await destroy_replica(request, path_filter(filters.NodePoolReplica, request))


async def del_pool_replica(request):
    return await destroy_replica(request, path_filter(filters.PoolReplica, request))


async def destroy_replica(request, filter):
    bus = bus_of(request)
    destroy = await resolve_destroy_replica(bus, filter)
    await bus.destroy_replica(destroy)
    return format_empty_response()


ROUTES = [
    ('GET', '/v0/replicas', list_resources(ResourceKind.REPLICAS, filters.All)),
    ('GET', '/v0/replicas/{replica_id}', get_resource(ResourceKind.REPLICAS, filters.Replica)),
    ('GET', '/v0/nodes/{node_id}/replicas', list_resources(ResourceKind.REPLICAS, filters.Node)),
    ('GET', '/v0/nodes/{node_id}/replicas/{replica_id}', get_resource(ResourceKind.REPLICAS, filters.NodeReplica)),
    ('GET', '/v0/pools/{pool_id}/replicas', list_resources(ResourceKind.REPLICAS, filters.Pool)),
    ('GET', '/v0/pools/{pool_id}/replicas/{replica_id}', get_resource(ResourceKind.REPLICAS, filters.PoolReplica)),
    ('GET', '/v0/nodes/{node_id}/pools/{pool_id}/replicas', list_resources(ResourceKind.REPLICAS, filters.NodePool)),
    ('GET', '/v0/nodes/{node_id}/pools/{pool_id}/replicas/{replica_id}',
     get_resource(ResourceKind.REPLICAS, filters.NodePoolReplica)),
    ('PUT', '/v0/nodes/{node_id}/pools/{pool_id}/replicas/{replica_id}', put_node_pool_replica),
    ('PUT', '/v0/pools/{pool_id}/replicas/{replica_id}', put_pool_replica),
    ('DELETE', '/v0/nodes/{node_id}/pools/{pool_id}/replicas/{replica_id}', del_node_pool_replica),
    ('DELETE', '/v0/pools/{pool_id}/replicas/{replica_id}', del_pool_replica),
]
