"""Node routes"""

from ..models import filters
from ..urns import ResourceKind
from .base import get_resource, list_resources

ROUTES = [
    ('GET', '/v0/nodes', list_resources(ResourceKind.NODES, filters.All)),
    ('GET', '/v0/nodes/{node_id}', get_resource(ResourceKind.NODES, filters.Node)),
]
