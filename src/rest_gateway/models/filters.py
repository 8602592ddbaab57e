"""Filter algebra addressing resources by their own id and their ancestors' ids.

Every variant is a frozen dataclass deriving from ``Filter``. The set of
variants is closed: a resource type accepts a fixed subset of them (see
``rest_gateway.urns``) and anything else is an ``InvalidFilter``.
"""
from dataclasses import asdict, dataclass, fields
from typing import Dict, Mapping, Type


class InvalidFilter(ValueError):
    """Filter variant is not accepted by the addressed resource type."""

    def __init__(self, filter: 'Filter', resource: str):
        super().__init__(f"Invalid filter {filter!r} for {resource}")
        self.filter = filter
        self.resource = resource


@dataclass(frozen=True)
class Filter:
    """Base of all filter variants."""

    def params(self) -> Dict[str, str]:
        """Ids carried by this filter, keyed by field name."""
        return asdict(self)


@dataclass(frozen=True)
class All(Filter):
    """Every instance of the resource."""


@dataclass(frozen=True)
class Node(Filter):
    node_id: str


@dataclass(frozen=True)
class Pool(Filter):
    pool_id: str


@dataclass(frozen=True)
class NodePool(Filter):
    node_id: str
    pool_id: str


@dataclass(frozen=True)
class Replica(Filter):
    replica_id: str


@dataclass(frozen=True)
class NodeReplica(Filter):
    node_id: str
    replica_id: str


@dataclass(frozen=True)
class PoolReplica(Filter):
    pool_id: str
    replica_id: str


@dataclass(frozen=True)
class NodePoolReplica(Filter):
    node_id: str
    pool_id: str
    replica_id: str


@dataclass(frozen=True)
class Nexus(Filter):
    nexus_id: str


@dataclass(frozen=True)
class NodeNexus(Filter):
    node_id: str
    nexus_id: str


@dataclass(frozen=True)
class Volume(Filter):
    volume_id: str


@dataclass(frozen=True)
class NodeVolume(Filter):
    node_id: str
    volume_id: str


VARIANTS = (
    All,
    Node,
    Pool,
    NodePool,
    Replica,
    NodeReplica,
    PoolReplica,
    NodePoolReplica,
    Nexus,
    NodeNexus,
    Volume,
    NodeVolume,
)


def build(variant: Type[Filter], params: Mapping[str, str]) -> Filter:
    """Build a filter of the given variant, picking its ids out of params.

    Extra keys (e.g. a child id next to the nexus id in a route's match
    info) are ignored; a missing id raises KeyError.
    """
    return variant(**{f.name: params[f.name] for f in fields(variant)})
