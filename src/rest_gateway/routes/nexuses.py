"""Nexus routes"""

from ..models import filters
from ..models.requests import CreateNexusBody, ShareNexus, UnshareNexus
from ..models.resources import Protocol
from ..services.resolver import resolve_destroy_nexus
from ..services.utils import InvalidArgument, format_empty_response, format_json_response
from ..urns import ResourceKind
from .base import bus_of, get_resource, list_resources, path_filter, read_body


async def put_node_nexus(request):
    """Create a nexus on a node"""
    body = await read_body(request, CreateNexusBody)
    create = body.bus_request(request.match_info['node_id'], request.match_info['nexus_id'])
    nexus = await bus_of(request).create_nexus(create)
    return format_json_response(nexus)


async def del_node_nexus(request):
    return await destroy_nexus(request, path_filter(filters.NodeNexus, request))


async def del_nexus(request):
    return await destroy_nexus(request, path_filter(filters.Nexus, request))


async def destroy_nexus(request, filter):
    bus = bus_of(request)
    destroy = await resolve_destroy_nexus(bus, filter)
    await bus.destroy_nexus(destroy)
    return format_empty_response()


async def put_node_nexus_share(request):
    """Share a nexus over the protocol named in the path; returns the share URI"""
    name = request.match_info['protocol']
    try:
        protocol = Protocol(name)
    except ValueError:
        raise InvalidArgument(f"Unknown share protocol '{name}'")

    share = ShareNexus(
        node=request.match_info['node_id'],
        uuid=request.match_info['nexus_id'],
        protocol=protocol,
    )
    uri = await bus_of(request).share_nexus(share)
    return format_json_response(uri)


async def del_node_nexus_share(request):
    unshare = UnshareNexus(
        node=request.match_info['node_id'],
        uuid=request.match_info['nexus_id'],
    )
    await bus_of(request).unshare_nexus(unshare)
    return format_empty_response()


ROUTES = [
    ('GET', '/v0/nexuses', list_resources(ResourceKind.NEXUSES, filters.All)),
    ('GET', '/v0/nexuses/{nexus_id}', get_resource(ResourceKind.NEXUSES, filters.Nexus)),
    ('GET', '/v0/nodes/{node_id}/nexuses', list_resources(ResourceKind.NEXUSES, filters.Node)),
    ('GET', '/v0/nodes/{node_id}/nexuses/{nexus_id}', get_resource(ResourceKind.NEXUSES, filters.NodeNexus)),
    ('PUT', '/v0/nodes/{node_id}/nexuses/{nexus_id}', put_node_nexus),
    ('DELETE', '/v0/nodes/{node_id}/nexuses/{nexus_id}', del_node_nexus),
    ('DELETE', '/v0/nexuses/{nexus_id}', del_nexus),
    ('PUT', '/v0/nodes/{node_id}/nexuses/{nexus_id}/share/{protocol}', put_node_nexus_share),
    ('DELETE', '/v0/nodes/{node_id}/nexuses/{nexus_id}/share', del_node_nexus_share),
]
