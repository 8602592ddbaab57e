"""Canonical REST paths of every filter accepted by each resource type.

Both the server (to validate filters) and the client (to build request
paths) read ``URN_TEMPLATES``; a variant missing from a resource's table is
rejected with ``InvalidFilter`` before anything goes over the wire.
"""
from enum import Enum
from typing import Dict, Type
from urllib.parse import quote

from .models import filters
from .models.filters import Filter, InvalidFilter

API_PREFIX = "/v0"


class ResourceKind(Enum):
    NODES = "nodes"
    POOLS = "pools"
    REPLICAS = "replicas"
    NEXUSES = "nexuses"
    CHILDREN = "children"
    VOLUMES = "volumes"


URN_TEMPLATES: Dict[ResourceKind, Dict[Type[Filter], str]] = {
    ResourceKind.NODES: {
        filters.All: "nodes",
        filters.Node: "nodes/{node_id}",
    },
    ResourceKind.POOLS: {
        filters.All: "pools",
        filters.Node: "nodes/{node_id}/pools",
        filters.Pool: "pools/{pool_id}",
        filters.NodePool: "nodes/{node_id}/pools/{pool_id}",
    },
    ResourceKind.REPLICAS: {
        filters.All: "replicas",
        filters.Node: "nodes/{node_id}/replicas",
        filters.Pool: "pools/{pool_id}/replicas",
        filters.Replica: "replicas/{replica_id}",
        filters.NodePool: "nodes/{node_id}/pools/{pool_id}/replicas",
        filters.NodeReplica: "nodes/{node_id}/replicas/{replica_id}",
        filters.PoolReplica: "pools/{pool_id}/replicas/{replica_id}",
        filters.NodePoolReplica: "nodes/{node_id}/pools/{pool_id}/replicas/{replica_id}",
    },
    ResourceKind.NEXUSES: {
        filters.All: "nexuses",
        filters.Node: "nodes/{node_id}/nexuses",
        filters.Nexus: "nexuses/{nexus_id}",
        filters.NodeNexus: "nodes/{node_id}/nexuses/{nexus_id}",
    },
    ResourceKind.CHILDREN: {
        filters.Nexus: "nexuses/{nexus_id}/children",
        filters.NodeNexus: "nodes/{node_id}/nexuses/{nexus_id}/children",
    },
    ResourceKind.VOLUMES: {
        filters.All: "volumes",
        filters.Node: "nodes/{node_id}/volumes",
        filters.Volume: "volumes/{volume_id}",
        filters.NodeVolume: "nodes/{node_id}/volumes/{volume_id}",
    },
}


def segment(value: str) -> str:
    """Quote a value so it stays a single path segment."""
    return quote(value, safe="")


def check_filter(kind: ResourceKind, filter: Filter) -> None:
    if type(filter) not in URN_TEMPLATES[kind]:
        raise InvalidFilter(filter, kind.value)


def filtered_urn(kind: ResourceKind, filter: Filter) -> str:
    """Path of the resources of the given kind selected by filter."""
    check_filter(kind, filter)
    template = URN_TEMPLATES[kind][type(filter)]
    params = {name: segment(value) for name, value in filter.params().items()}
    return f"{API_PREFIX}/{template.format(**params)}"


def route_path(kind: ResourceKind, variant: Type[Filter]) -> str:
    """Server route template serving the given filter variant."""
    return f"{API_PREFIX}/{URN_TEMPLATES[kind][variant]}"
