"""Models package for the REST gateway."""
from . import filters
from .base import JsonModel, json_field
from .filters import Filter, InvalidFilter
from .resources import (
    NodeState,
    PoolState,
    NexusState,
    ChildState,
    Protocol,
    Node,
    Pool,
    Replica,
    Child,
    Nexus,
    Volume,
)
from .requests import (
    CreatePool,
    DestroyPool,
    CreateReplica,
    DestroyReplica,
    CreateNexus,
    DestroyNexus,
    ShareNexus,
    UnshareNexus,
    AddNexusChild,
    RemoveNexusChild,
    CreateVolume,
    DestroyVolume,
    CreatePoolBody,
    CreateReplicaBody,
    CreateNexusBody,
    CreateVolumeBody,
)

__all__ = [
    'filters',
    'JsonModel',
    'json_field',
    'Filter',
    'InvalidFilter',
    'NodeState',
    'PoolState',
    'NexusState',
    'ChildState',
    'Protocol',
    'Node',
    'Pool',
    'Replica',
    'Child',
    'Nexus',
    'Volume',
    'CreatePool',
    'DestroyPool',
    'CreateReplica',
    'DestroyReplica',
    'CreateNexus',
    'DestroyNexus',
    'ShareNexus',
    'UnshareNexus',
    'AddNexusChild',
    'RemoveNexusChild',
    'CreateVolume',
    'DestroyVolume',
    'CreatePoolBody',
    'CreateReplicaBody',
    'CreateNexusBody',
    'CreateVolumeBody',
]
