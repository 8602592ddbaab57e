"""Nexus child routes

The child id is the rest of the path and is turned into the child's URI by
``build_child_uri``; a query string on the request belongs to that URI.
"""

from ..models import filters
from ..models.requests import AddNexusChild, RemoveNexusChild
from ..services.child_uri import build_child_uri, find_child
from ..services.utils import format_empty_response, format_json_response
from ..urns import ResourceKind, check_filter
from .base import bus_of, path_filter


async def nexus_of(request, variant):
    filter = path_filter(variant, request)
    check_filter(ResourceKind.CHILDREN, filter)
    return await bus_of(request).get_nexus(filter)


def child_uri(request) -> str:
    return build_child_uri(request.match_info['child_id'], request.rel_url.raw_query_string)


async def list_children(request, variant):
    nexus = await nexus_of(request, variant)
    return format_json_response(nexus.children)


async def get_child(request, variant):
    nexus = await nexus_of(request, variant)
    return format_json_response(find_child(nexus, child_uri(request)))


async def add_child(request, variant):
    nexus = await nexus_of(request, variant)
    add = AddNexusChild(node=nexus.node, nexus=nexus.uuid, uri=child_uri(request), auto_rebuild=True)
    child = await bus_of(request).add_nexus_child(add)
    return format_json_response(child)


async def remove_child(request, variant):
    nexus = await nexus_of(request, variant)
    remove = RemoveNexusChild(node=nexus.node, nexus=nexus.uuid, uri=child_uri(request))
    await bus_of(request).remove_nexus_child(remove)
    return format_empty_response()


async def get_nexus_children(request):
    return await list_children(request, filters.Nexus)


async def get_node_nexus_children(request):
    return await list_children(request, filters.NodeNexus)


async def get_nexus_child(request):
    return await get_child(request, filters.Nexus)


async def get_node_nexus_child(request):
    return await get_child(request, filters.NodeNexus)


async def add_nexus_child(request):
    return await add_child(request, filters.Nexus)


async def add_node_nexus_child(request):
    return await add_child(request, filters.NodeNexus)


async def delete_nexus_child(request):
    return await remove_child(request, filters.Nexus)


async def delete_node_nexus_child(request):
    return await remove_child(request, filters.NodeNexus)


ROUTES = [
    ('GET', '/v0/nexuses/{nexus_id}/children', get_nexus_children),
    ('GET', '/v0/nodes/{node_id}/nexuses/{nexus_id}/children', get_node_nexus_children),
    ('GET', '/v0/nexuses/{nexus_id}/children/{child_id:.*}', get_nexus_child),
    ('GET', '/v0/nodes/{node_id}/nexuses/{nexus_id}/children/{child_id:.*}', get_node_nexus_child),
    ('PUT', '/v0/nexuses/{nexus_id}/children/{child_id:.*}', add_nexus_child),
    ('PUT', '/v0/nodes/{node_id}/nexuses/{nexus_id}/children/{child_id:.*}', add_node_nexus_child),
    ('DELETE', '/v0/nexuses/{nexus_id}/children/{child_id:.*}', delete_nexus_child),
    ('DELETE', '/v0/nodes/{node_id}/nexuses/{nexus_id}/children/{child_id:.*}', delete_node_nexus_child),
]
