from abc import ABC, abstractmethod
from typing import List, TypeVar

from ..models.filters import Filter
from ..models.resources import Child, Nexus, Node, Pool, Replica, Volume
from ..models.requests import (
    AddNexusChild,
    CreateNexus,
    CreatePool,
    CreateReplica,
    CreateVolume,
    DestroyNexus,
    DestroyPool,
    DestroyReplica,
    DestroyVolume,
    RemoveNexusChild,
    ShareNexus,
    UnshareNexus,
)
from .errors import NotFound, NotUnique

T = TypeVar('T')


def single(items: List[T], what: str) -> T:
    """The only element of items; NotFound when empty, NotUnique when several."""
    if not items:
        raise NotFound(f"{what} not found")
    if len(items) > 1:
        raise NotUnique(f"{len(items)} {what} resources match the filter")
    return items[0]


class MessageBus(ABC):
    """Typed request/response operations offered by the control plane bus.

    Every operation may fail with ``NotFound``, ``NotUnique`` or
    ``MessageBusError``. Timeouts and retries belong to the implementation.
    """

    @abstractmethod
    async def get_nodes(self, filter: Filter) -> List[Node]:
        """Nodes matching the filter."""
        pass

    @abstractmethod
    async def get_pools(self, filter: Filter) -> List[Pool]:
        """Pools matching the filter."""
        pass

    @abstractmethod
    async def get_replicas(self, filter: Filter) -> List[Replica]:
        """Replicas matching the filter."""
        pass

    @abstractmethod
    async def get_nexuses(self, filter: Filter) -> List[Nexus]:
        """Nexuses matching the filter."""
        pass

    @abstractmethod
    async def get_volumes(self, filter: Filter) -> List[Volume]:
        """Volumes matching the filter."""
        pass

    @abstractmethod
    async def create_pool(self, request: CreatePool) -> Pool:
        pass

    @abstractmethod
    async def destroy_pool(self, request: DestroyPool) -> None:
        pass

    @abstractmethod
    async def create_replica(self, request: CreateReplica) -> Replica:
        pass

    @abstractmethod
    async def destroy_replica(self, request: DestroyReplica) -> None:
        pass

    @abstractmethod
    async def create_nexus(self, request: CreateNexus) -> Nexus:
        pass

    @abstractmethod
    async def destroy_nexus(self, request: DestroyNexus) -> None:
        pass

    @abstractmethod
    async def share_nexus(self, request: ShareNexus) -> str:
        """Share a nexus and return the URI it is reachable on."""
        pass

    @abstractmethod
    async def unshare_nexus(self, request: UnshareNexus) -> None:
        pass

    @abstractmethod
    async def add_nexus_child(self, request: AddNexusChild) -> Child:
        pass

    @abstractmethod
    async def remove_nexus_child(self, request: RemoveNexusChild) -> None:
        pass

    @abstractmethod
    async def create_volume(self, request: CreateVolume) -> Volume:
        pass

    @abstractmethod
    async def destroy_volume(self, request: DestroyVolume) -> None:
        pass

    async def get_node(self, filter: Filter) -> Node:
        return single(await self.get_nodes(filter), "node")

    async def get_pool(self, filter: Filter) -> Pool:
        return single(await self.get_pools(filter), "pool")

    async def get_replica(self, filter: Filter) -> Replica:
        return single(await self.get_replicas(filter), "replica")

    async def get_nexus(self, filter: Filter) -> Nexus:
        return single(await self.get_nexuses(filter), "nexus")

    async def get_volume(self, filter: Filter) -> Volume:
        return single(await self.get_volumes(filter), "volume")
