"""Volume routes"""

from ..models import filters
from ..models.requests import CreateVolumeBody, DestroyVolume
from ..services.utils import format_empty_response, format_json_response
from ..urns import ResourceKind
from .base import bus_of, get_resource, list_resources, read_body


async def put_volume(request):
    """Create a volume; placement is left to the control plane"""
    body = await read_body(request, CreateVolumeBody)
    create = body.bus_request(request.match_info['volume_id'])
    volume = await bus_of(request).create_volume(create)
    return format_json_response(volume)


async def del_volume(request):
    await bus_of(request).destroy_volume(DestroyVolume(uuid=request.match_info['volume_id']))
    return format_empty_response()


ROUTES = [
    ('GET', '/v0/volumes', list_resources(ResourceKind.VOLUMES, filters.All)),
    ('GET', '/v0/volumes/{volume_id}', get_resource(ResourceKind.VOLUMES, filters.Volume)),
    ('GET', '/v0/nodes/{node_id}/volumes', list_resources(ResourceKind.VOLUMES, filters.Node)),
    ('GET', '/v0/nodes/{node_id}/volumes/{volume_id}', get_resource(ResourceKind.VOLUMES, filters.NodeVolume)),
    ('PUT', '/v0/volumes/{volume_id}', put_volume),
    ('DELETE', '/v0/volumes/{volume_id}', del_volume),
]
