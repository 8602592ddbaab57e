"""Typed REST client operations.

``RestClient`` turns each operation into a path, through ``URN_TEMPLATES``
for filtered reads and from the request's own ids for mutations, and decodes
the JSON answer into the resource types. Subclasses only move bytes.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from ..models import filters
from ..models.filters import Filter
from ..models.requests import (
    AddNexusChild,
    CreateNexus,
    CreateNexusBody,
    CreatePool,
    CreatePoolBody,
    CreateReplica,
    CreateReplicaBody,
    CreateVolume,
    CreateVolumeBody,
    DestroyNexus,
    DestroyPool,
    DestroyReplica,
    DestroyVolume,
    RemoveNexusChild,
    ShareNexus,
    UnshareNexus,
)
from ..models.resources import Child, Nexus, Node, Pool, Replica, Volume
from ..urns import API_PREFIX, ResourceKind, filtered_urn, segment


def as_list(data: Any) -> List[Any]:
    """Single-resource answers come back as one object; list calls want a list."""
    if data is None:
        return []
    if isinstance(data, list):
        return data
    return [data]


class RestClient(ABC):
    """REST API operations over an abstract transport."""

    @abstractmethod
    async def _get(self, urn: str) -> Any:
        """GET urn and return the decoded JSON answer."""
        pass

    @abstractmethod
    async def _put(self, urn: str, body: Optional[dict] = None) -> Any:
        """PUT body as JSON to urn and return the decoded JSON answer."""
        pass

    @abstractmethod
    async def _delete(self, urn: str) -> Any:
        """DELETE urn and return the decoded JSON answer."""
        pass

    async def _get_all(self, kind: ResourceKind, filter: Filter, model):
        urn = filtered_urn(kind, filter)
        return [model.from_dict(item) for item in as_list(await self._get(urn))]

    # Nodes

    async def get_nodes(self, filter: Filter = filters.All()) -> List[Node]:
        return await self._get_all(ResourceKind.NODES, filter, Node)

    # Pools

    async def get_pools(self, filter: Filter = filters.All()) -> List[Pool]:
        return await self._get_all(ResourceKind.POOLS, filter, Pool)

    async def create_pool(self, create: CreatePool) -> Pool:
        urn = f"{API_PREFIX}/nodes/{segment(create.node)}/pools/{segment(create.name)}"
        return Pool.from_dict(await self._put(urn, CreatePoolBody.from_request(create).to_dict()))

    async def destroy_pool(self, destroy: DestroyPool) -> None:
        await self._delete(f"{API_PREFIX}/nodes/{segment(destroy.node)}/pools/{segment(destroy.name)}")

    # Replicas

    async def get_replicas(self, filter: Filter = filters.All()) -> List[Replica]:
        return await self._get_all(ResourceKind.REPLICAS, filter, Replica)

    async def create_replica(self, create: CreateReplica) -> Replica:
        urn = (f"{API_PREFIX}/nodes/{segment(create.node)}/pools/{segment(create.pool)}"
               f"/replicas/{segment(create.uuid)}")
        body = CreateReplicaBody.from_request(create).to_dict()
        return Replica.from_dict(await self._put(urn, body))

    async def destroy_replica(self, destroy: DestroyReplica) -> None:
        urn = (f"{API_PREFIX}/nodes/{segment(destroy.node)}/pools/{segment(destroy.pool)}"
               f"/replicas/{segment(destroy.uuid)}")
        await self._delete(urn)

    # Nexuses

    async def get_nexuses(self, filter: Filter = filters.All()) -> List[Nexus]:
        return await self._get_all(ResourceKind.NEXUSES, filter, Nexus)

    async def create_nexus(self, create: CreateNexus) -> Nexus:
        urn = f"{API_PREFIX}/nodes/{segment(create.node)}/nexuses/{segment(create.uuid)}"
        return Nexus.from_dict(await self._put(urn, CreateNexusBody.from_request(create).to_dict()))

    async def destroy_nexus(self, destroy: DestroyNexus) -> None:
        await self._delete(f"{API_PREFIX}/nodes/{segment(destroy.node)}/nexuses/{segment(destroy.uuid)}")

    async def share_nexus(self, share: ShareNexus) -> str:
        """Share a nexus, returning the URI it is reachable at."""
        urn = (f"{API_PREFIX}/nodes/{segment(share.node)}/nexuses/{segment(share.uuid)}"
               f"/share/{share.protocol.value}")
        return await self._put(urn)

    async def unshare_nexus(self, unshare: UnshareNexus) -> None:
        urn = f"{API_PREFIX}/nodes/{segment(unshare.node)}/nexuses/{segment(unshare.uuid)}/share"
        await self._delete(urn)

    # Nexus children

    async def get_nexus_children(self, filter: Filter) -> List[Child]:
        return await self._get_all(ResourceKind.CHILDREN, filter, Child)

    def _child_urn(self, node: str, nexus: str, uri: str) -> str:
        return f"{API_PREFIX}/nodes/{segment(node)}/nexuses/{segment(nexus)}/children/{segment(uri)}"

    async def add_nexus_child(self, add: AddNexusChild) -> Child:
        return Child.from_dict(await self._put(self._child_urn(add.node, add.nexus, add.uri)))

    async def remove_nexus_child(self, remove: RemoveNexusChild) -> None:
        await self._delete(self._child_urn(remove.node, remove.nexus, remove.uri))

    # Volumes

    async def get_volumes(self, filter: Filter = filters.All()) -> List[Volume]:
        return await self._get_all(ResourceKind.VOLUMES, filter, Volume)

    async def create_volume(self, create: CreateVolume) -> Volume:
        urn = f"{API_PREFIX}/volumes/{segment(create.uuid)}"
        return Volume.from_dict(await self._put(urn, CreateVolumeBody.from_request(create).to_dict()))

    async def destroy_volume(self, destroy: DestroyVolume) -> None:
        await self._delete(f"{API_PREFIX}/volumes/{segment(destroy.uuid)}")
