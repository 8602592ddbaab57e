"""Bus requests and the REST bodies they are built from.

A REST body only carries what the resource owns; the ids of the resource and
of its ancestors come from the request path. ``bus_request`` merges the two,
``from_request`` goes the other way for the client library.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from .base import JsonModel
from .resources import Protocol


@dataclass
class CreatePool(JsonModel):
    node: str
    name: str
    disks: List[str] = field(default_factory=list)


@dataclass
class DestroyPool(JsonModel):
    node: str
    name: str


@dataclass
class CreateReplica(JsonModel):
    node: str
    uuid: str
    pool: str
    size: int
    thin: bool = False
    share: Protocol = Protocol.NONE


@dataclass
class DestroyReplica(JsonModel):
    node: str
    pool: str
    uuid: str


@dataclass
class CreateNexus(JsonModel):
    node: str
    uuid: str
    size: int
    children: List[str] = field(default_factory=list)


@dataclass
class DestroyNexus(JsonModel):
    node: str
    uuid: str


@dataclass
class ShareNexus(JsonModel):
    node: str
    uuid: str
    protocol: Protocol
    key: Optional[str] = None


@dataclass
class UnshareNexus(JsonModel):
    node: str
    uuid: str


@dataclass
class AddNexusChild(JsonModel):
    node: str
    nexus: str
    uri: str
    auto_rebuild: bool = True


@dataclass
class RemoveNexusChild(JsonModel):
    node: str
    nexus: str
    uri: str


@dataclass
class CreateVolume(JsonModel):
    uuid: str
    size: int
    nexuses: int = 1
    replicas: int = 1
    allowed_nodes: List[str] = field(default_factory=list)
    preferred_nodes: List[str] = field(default_factory=list)
    preferred_nexus_nodes: List[str] = field(default_factory=list)


@dataclass
class DestroyVolume(JsonModel):
    uuid: str


@dataclass
class CreatePoolBody(JsonModel):
    """Body of PUT /v0/nodes/{node_id}/pools/{pool_id}"""
    disks: List[str]

    @classmethod
    def from_request(cls, create: CreatePool) -> 'CreatePoolBody':
        return cls(disks=list(create.disks))

    def bus_request(self, node_id: str, pool_id: str) -> CreatePool:
        return CreatePool(node=node_id, name=pool_id, disks=list(self.disks))


@dataclass
class CreateReplicaBody(JsonModel):
    """Body of PUT /v0/nodes/{node_id}/pools/{pool_id}/replicas/{replica_id}"""
    size: int
    thin: bool = False
    share: Protocol = Protocol.NONE

    @classmethod
    def from_request(cls, create: CreateReplica) -> 'CreateReplicaBody':
        return cls(size=create.size, thin=create.thin, share=create.share)

    def bus_request(self, node_id: str, pool_id: str, uuid: str) -> CreateReplica:
        return CreateReplica(
            node=node_id,
            uuid=uuid,
            pool=pool_id,
            size=self.size,
            thin=self.thin,
            share=self.share,
        )


@dataclass
class CreateNexusBody(JsonModel):
    """Body of PUT /v0/nodes/{node_id}/nexuses/{nexus_id}"""
    size: int
    children: List[str] = field(default_factory=list)

    @classmethod
    def from_request(cls, create: CreateNexus) -> 'CreateNexusBody':
        return cls(size=create.size, children=list(create.children))

    def bus_request(self, node_id: str, nexus_id: str) -> CreateNexus:
        return CreateNexus(
            node=node_id,
            uuid=nexus_id,
            size=self.size,
            children=list(self.children),
        )


@dataclass
class CreateVolumeBody(JsonModel):
    """Body of PUT /v0/volumes/{volume_id}"""
    size: int
    nexuses: int = 1
    replicas: int = 1
    allowed_nodes: List[str] = field(default_factory=list)
    preferred_nodes: List[str] = field(default_factory=list)
    preferred_nexus_nodes: List[str] = field(default_factory=list)

    @classmethod
    def from_request(cls, create: CreateVolume) -> 'CreateVolumeBody':
        return cls(
            size=create.size,
            nexuses=create.nexuses,
            replicas=create.replicas,
            allowed_nodes=list(create.allowed_nodes),
            preferred_nodes=list(create.preferred_nodes),
            preferred_nexus_nodes=list(create.preferred_nexus_nodes),
        )

    def bus_request(self, volume_id: str) -> CreateVolume:
        return CreateVolume(
            uuid=volume_id,
            size=self.size,
            nexuses=self.nexuses,
            replicas=self.replicas,
            allowed_nodes=list(self.allowed_nodes),
            preferred_nodes=list(self.preferred_nodes),
            preferred_nexus_nodes=list(self.preferred_nexus_nodes),
        )
