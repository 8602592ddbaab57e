"""Control plane resources as returned by the bus and served over REST."""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .base import JsonModel, json_field


class NodeState(Enum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    OFFLINE = "offline"


class PoolState(Enum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    DEGRADED = "degraded"
    FAULTED = "faulted"


class NexusState(Enum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    DEGRADED = "degraded"
    FAULTED = "faulted"


class ChildState(Enum):
    UNKNOWN = "unknown"
    ONLINE = "online"
    DEGRADED = "degraded"
    FAULTED = "faulted"


class Protocol(Enum):
    """Protocol a replica or nexus is shared over."""
    NONE = "none"
    NVMF = "nvmf"
    ISCSI = "iscsi"
    NBD = "nbd"


@dataclass
class Node(JsonModel):
    """Storage node running a data plane agent"""
    id: str
    grpc_endpoint: str = json_field("grpcEndpoint", default="")
    state: NodeState = NodeState.UNKNOWN


@dataclass
class Pool(JsonModel):
    """Capacity aggregate owned by a node, built from one or more disks"""
    node: str
    name: str
    disks: List[str] = field(default_factory=list)
    state: PoolState = PoolState.UNKNOWN
    capacity: int = 0  # in bytes
    used: int = 0  # in bytes


@dataclass
class Replica(JsonModel):
    """Unit of storage carved out of a pool"""
    node: str
    uuid: str
    pool: str
    thin: bool = False
    size: int = 0  # in bytes
    share: Protocol = Protocol.NONE
    uri: str = ""


@dataclass
class Child(JsonModel):
    """Backing device of a nexus, keyed by its URI"""
    uri: str
    state: ChildState = ChildState.UNKNOWN
    rebuild_progress: Optional[int] = json_field("rebuildProgress", default=None)


@dataclass
class Nexus(JsonModel):
    """Aggregation point exposing its children as a single block device"""
    node: str
    uuid: str
    size: int = 0  # in bytes
    state: NexusState = NexusState.UNKNOWN
    children: List[Child] = field(default_factory=list)
    device_uri: str = json_field("deviceUri", default="")
    rebuilds: int = 0


@dataclass
class Volume(JsonModel):
    """Placement-independent volume made of one or more nexuses"""
    uuid: str
    size: int = 0  # in bytes
    state: NexusState = NexusState.UNKNOWN
    children: List[Nexus] = field(default_factory=list)
