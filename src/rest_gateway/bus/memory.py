"""In-memory message bus standing in for the control plane agents.

Used by the test-suite and by the standalone gateway. Every operation runs
to completion without awaiting, so a mutation is atomic with respect to the
other requests served by the same event loop.
"""
import copy
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..models.filters import Filter
from ..models.resources import (
    Child,
    ChildState,
    Nexus,
    NexusState,
    Node,
    NodeState,
    Pool,
    PoolState,
    Protocol,
    Replica,
    Volume,
)
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
from ..urns import ResourceKind, check_filter
from .errors import MessageBusError, NotFound, ReplyWithError
from .interfaces import MessageBus

logger = logging.getLogger(__name__)

DISK_CAPACITY = 10 * 1024 ** 3  # bytes contributed by each pool disk
GRPC_PORT = 10124
NVMF_PORT = 8420
ISCSI_PORT = 3260
NQN_PREFIX = "nqn.2019-05.io.openebs"
IQN_PREFIX = "iqn.2019-05.io.openebs"

# filter id -> entity attribute
_ATTRIBUTES = {
    ResourceKind.NODES: {'node_id': 'id'},
    ResourceKind.POOLS: {'node_id': 'node', 'pool_id': 'name'},
    ResourceKind.REPLICAS: {'node_id': 'node', 'pool_id': 'pool', 'replica_id': 'uuid'},
    ResourceKind.NEXUSES: {'node_id': 'node', 'nexus_id': 'uuid'},
    ResourceKind.VOLUMES: {'volume_id': 'uuid'},
}


def _rejected(message: str) -> MessageBusError:
    """Error as returned when an agent refuses a request."""
    return MessageBusError(ReplyWithError(message))


def _preferred_first(nodes: Iterable[Node], preferred: List[str]) -> List[Node]:
    return sorted(nodes, key=lambda node: node.id not in preferred)


class InMemoryBus(MessageBus):
    """Message bus keeping the whole control plane state in process."""

    def __init__(self):
        self.nodes: Dict[str, Node] = {}
        self.pools: Dict[Tuple[str, str], Pool] = {}
        self.replicas: Dict[str, Replica] = {}
        self.nexuses: Dict[Tuple[str, str], Nexus] = {}
        self.volumes: Dict[str, Volume] = {}
        self._volume_nexuses: Dict[str, List[Tuple[str, str]]] = {}
        self._volume_replicas: Dict[str, List[str]] = {}

    def add_node(self, node_id: str, grpc_endpoint: Optional[str] = None,
                 state: NodeState = NodeState.ONLINE) -> Node:
        """Register a node, as its agent would on start-up."""
        node = Node(
            id=node_id,
            grpc_endpoint=grpc_endpoint or f"{node_id}:{GRPC_PORT}",
            state=state,
        )
        self.nodes[node_id] = node
        logger.info(f"Registered node {node_id} ({node.grpc_endpoint})")
        return copy.deepcopy(node)

    def _select(self, kind: ResourceKind, items: Iterable, filter: Filter) -> List:
        check_filter(kind, filter)
        attributes = _ATTRIBUTES[kind]
        wanted = {
            attributes[name]: value
            for name, value in filter.params().items()
            if name in attributes
        }
        return [
            copy.deepcopy(item)
            for item in items
            if all(getattr(item, attr) == value for attr, value in wanted.items())
        ]

    def _node(self, node_id: str) -> Node:
        node = self.nodes.get(node_id)
        if node is None:
            raise NotFound(f"node {node_id} not found")
        return node

    def _host(self, node_id: str) -> str:
        return self._node(node_id).grpc_endpoint.split(':')[0] or node_id

    def _pool(self, node_id: str, pool_id: str) -> Pool:
        pool = self.pools.get((node_id, pool_id))
        if pool is None:
            raise NotFound(f"pool {pool_id} not found on node {node_id}")
        return pool

    def _nexus(self, node_id: str, nexus_id: str) -> Nexus:
        nexus = self.nexuses.get((node_id, nexus_id))
        if nexus is None:
            raise NotFound(f"nexus {nexus_id} not found on node {node_id}")
        return nexus

    def _volume_view(self, uuid: str) -> Volume:
        volume = copy.deepcopy(self.volumes[uuid])
        volume.children = [
            copy.deepcopy(self.nexuses[key])
            for key in self._volume_nexuses[uuid] if key in self.nexuses
        ]
        return volume

    async def get_nodes(self, filter: Filter) -> List[Node]:
        return self._select(ResourceKind.NODES, self.nodes.values(), filter)

    async def get_pools(self, filter: Filter) -> List[Pool]:
        return self._select(ResourceKind.POOLS, self.pools.values(), filter)

    async def get_replicas(self, filter: Filter) -> List[Replica]:
        return self._select(ResourceKind.REPLICAS, self.replicas.values(), filter)

    async def get_nexuses(self, filter: Filter) -> List[Nexus]:
        return self._select(ResourceKind.NEXUSES, self.nexuses.values(), filter)

    async def get_volumes(self, filter: Filter) -> List[Volume]:
        views = [self._volume_view(uuid) for uuid in self.volumes]
        volumes = self._select(ResourceKind.VOLUMES, views, filter)
        node_id = filter.params().get('node_id')
        if node_id is not None:
            volumes = [v for v in volumes if any(n.node == node_id for n in v.children)]
        return volumes

    async def create_pool(self, request: CreatePool) -> Pool:
        logger.debug(f"Creating pool {request}")
        self._node(request.node)
        if (request.node, request.name) in self.pools:
            raise _rejected(f"pool {request.name} already exists on node {request.node}")
        if not request.disks:
            raise _rejected(f"pool {request.name} needs at least one disk")

        pool = Pool(
            node=request.node,
            name=request.name,
            disks=list(request.disks),
            state=PoolState.ONLINE,
            capacity=len(request.disks) * DISK_CAPACITY,
            used=0,
        )
        self.pools[(pool.node, pool.name)] = pool
        return copy.deepcopy(pool)

    async def destroy_pool(self, request: DestroyPool) -> None:
        logger.debug(f"Destroying pool {request}")
        self._pool(request.node, request.name)
        hosted = [
            r.uuid for r in self.replicas.values()
            if r.node == request.node and r.pool == request.name
        ]
        if hosted:
            raise _rejected(f"pool {request.name} still hosts {len(hosted)} replica(s)")
        del self.pools[(request.node, request.name)]

    def _replica_uri(self, node_id: str, uuid: str, protocol: Protocol) -> str:
        if protocol == Protocol.NONE:
            return f"bdev:///{uuid}"
        if protocol == Protocol.NVMF:
            return f"nvmf://{self._host(node_id)}:{NVMF_PORT}/{NQN_PREFIX}:{uuid}"
        if protocol == Protocol.ISCSI:
            return f"iscsi://{self._host(node_id)}:{ISCSI_PORT}/{IQN_PREFIX}:{uuid}"
        raise _rejected(f"replicas cannot be shared over {protocol.value}")

    def _check_replica(self, request: CreateReplica) -> Pool:
        pool = self._pool(request.node, request.pool)
        if request.uuid in self.replicas:
            raise _rejected(f"replica {request.uuid} already exists")
        if request.size <= 0:
            raise _rejected(f"invalid replica size {request.size}")
        if not request.thin and pool.used + request.size > pool.capacity:
            raise _rejected(f"not enough space in pool {pool.name} for {request.size} bytes")
        return pool

    def _create_replica(self, request: CreateReplica) -> Replica:
        pool = self._check_replica(request)
        replica = Replica(
            node=request.node,
            uuid=request.uuid,
            pool=request.pool,
            thin=request.thin,
            size=request.size,
            share=request.share,
            uri=self._replica_uri(request.node, request.uuid, request.share),
        )
        if not replica.thin:
            pool.used += replica.size
        self.replicas[replica.uuid] = replica
        return replica

    def _destroy_replica(self, uuid: str) -> None:
        replica = self.replicas.pop(uuid)
        pool = self.pools.get((replica.node, replica.pool))
        if pool is not None and not replica.thin:
            pool.used -= replica.size

    async def create_replica(self, request: CreateReplica) -> Replica:
        logger.debug(f"Creating replica {request}")
        return copy.deepcopy(self._create_replica(request))

    async def destroy_replica(self, request: DestroyReplica) -> None:
        logger.debug(f"Destroying replica {request}")
        replica = self.replicas.get(request.uuid)
        if replica is None or replica.node != request.node or replica.pool != request.pool:
            raise NotFound(f"replica {request.uuid} not found in pool {request.pool}")
        self._destroy_replica(request.uuid)

    def _create_nexus(self, request: CreateNexus) -> Nexus:
        self._node(request.node)
        if (request.node, request.uuid) in self.nexuses:
            raise _rejected(f"nexus {request.uuid} already exists on node {request.node}")
        if not request.children:
            raise _rejected(f"nexus {request.uuid} needs at least one child")

        nexus = Nexus(
            node=request.node,
            uuid=request.uuid,
            size=request.size,
            state=NexusState.ONLINE,
            children=[Child(uri=uri, state=ChildState.ONLINE) for uri in request.children],
        )
        self.nexuses[(nexus.node, nexus.uuid)] = nexus
        return nexus

    async def create_nexus(self, request: CreateNexus) -> Nexus:
        logger.debug(f"Creating nexus {request}")
        return copy.deepcopy(self._create_nexus(request))

    async def destroy_nexus(self, request: DestroyNexus) -> None:
        logger.debug(f"Destroying nexus {request}")
        self._nexus(request.node, request.uuid)
        del self.nexuses[(request.node, request.uuid)]

    async def share_nexus(self, request: ShareNexus) -> str:
        logger.debug(f"Sharing nexus {request.uuid} over {request.protocol.value}")
        nexus = self._nexus(request.node, request.uuid)
        if request.protocol == Protocol.NONE:
            raise _rejected(f"cannot share nexus {request.uuid} over protocol none")
        if nexus.device_uri:
            if nexus.device_uri.startswith(f"{request.protocol.value}://"):
                return nexus.device_uri
            raise _rejected(f"nexus {request.uuid} is already shared as {nexus.device_uri}")

        host = self._host(request.node)
        if request.protocol == Protocol.NVMF:
            uri = f"nvmf://{host}:{NVMF_PORT}/{NQN_PREFIX}:nexus-{request.uuid}"
        elif request.protocol == Protocol.ISCSI:
            uri = f"iscsi://{host}:{ISCSI_PORT}/{IQN_PREFIX}:nexus-{request.uuid}/0"
        else:
            in_use = sum(
                1 for n in self.nexuses.values()
                if n.node == request.node and n.device_uri.startswith("file:///dev/nbd")
            )
            uri = f"file:///dev/nbd{in_use}"
        nexus.device_uri = uri
        return uri

    async def unshare_nexus(self, request: UnshareNexus) -> None:
        logger.debug(f"Unsharing nexus {request.uuid}")
        self._nexus(request.node, request.uuid).device_uri = ""

    async def add_nexus_child(self, request: AddNexusChild) -> Child:
        logger.debug(f"Adding child {request.uri} to nexus {request.nexus}")
        nexus = self._nexus(request.node, request.nexus)
        if any(child.uri == request.uri for child in nexus.children):
            raise _rejected(f"child {request.uri} already exists in nexus {request.nexus}")

        child = Child(
            uri=request.uri,
            state=ChildState.DEGRADED,
            rebuild_progress=0 if request.auto_rebuild else None,
        )
        nexus.children.append(child)
        nexus.state = NexusState.DEGRADED
        if request.auto_rebuild:
            nexus.rebuilds += 1
        return copy.deepcopy(child)

    async def remove_nexus_child(self, request: RemoveNexusChild) -> None:
        logger.debug(f"Removing child {request.uri} from nexus {request.nexus}")
        nexus = self._nexus(request.node, request.nexus)
        remaining = [child for child in nexus.children if child.uri != request.uri]
        if len(remaining) == len(nexus.children):
            raise NotFound(f"child {request.uri} not found in nexus {request.nexus}")
        if not remaining:
            raise _rejected(f"cannot remove the last child of nexus {request.nexus}")

        nexus.children = remaining
        if all(child.state == ChildState.ONLINE for child in remaining):
            nexus.state = NexusState.ONLINE

    def _placement_pools(self, request: CreateVolume, candidates: List[Node]) -> List[Pool]:
        """Emptiest suitable pool of each candidate node, preferred nodes first."""
        chosen = []
        for node in _preferred_first(candidates, request.preferred_nodes):
            pools = [
                p for p in self.pools.values()
                if p.node == node.id and p.state == PoolState.ONLINE
                and p.capacity - p.used >= request.size
            ]
            if pools:
                chosen.append(max(pools, key=lambda p: p.capacity - p.used))
        return chosen

    async def create_volume(self, request: CreateVolume) -> Volume:
        logger.debug(f"Creating volume {request}")
        if request.uuid in self.volumes:
            raise _rejected(f"volume {request.uuid} already exists")
        if request.nexuses < 1 or request.replicas < 1:
            raise _rejected("a volume needs at least one nexus and one replica")

        candidates = [
            n for n in self.nodes.values()
            if n.state == NodeState.ONLINE
            and (not request.allowed_nodes or n.id in request.allowed_nodes)
        ]
        pools = self._placement_pools(request, candidates)[:request.replicas]
        if len(pools) < request.replicas:
            raise _rejected(f"not enough pools to place {request.replicas} replica(s)")
        nexus_nodes = _preferred_first(candidates, request.preferred_nexus_nodes)[:request.nexuses]
        if len(nexus_nodes) < request.nexuses:
            raise _rejected(f"not enough nodes to place {request.nexuses} nexus(es)")

        replica_ids = [f"{request.uuid}-{index}" for index in range(len(pools))]
        taken = [uuid for uuid in replica_ids if uuid in self.replicas]
        taken += [n.id for n in nexus_nodes if (n.id, request.uuid) in self.nexuses]
        if taken:
            raise _rejected(f"volume {request.uuid} conflicts with existing resources: {taken}")

        local_node = nexus_nodes[0].id if len(nexus_nodes) == 1 else None
        replicas = [
            self._create_replica(CreateReplica(
                node=pool.node,
                uuid=uuid,
                pool=pool.name,
                size=request.size,
                thin=False,
                share=Protocol.NONE if pool.node == local_node else Protocol.NVMF,
            ))
            for uuid, pool in zip(replica_ids, pools)
        ]
        for node in nexus_nodes:
            self._create_nexus(CreateNexus(
                node=node.id,
                uuid=request.uuid,
                size=request.size,
                children=[r.uri for r in replicas],
            ))

        self.volumes[request.uuid] = Volume(
            uuid=request.uuid,
            size=request.size,
            state=NexusState.ONLINE,
        )
        self._volume_nexuses[request.uuid] = [(n.id, request.uuid) for n in nexus_nodes]
        self._volume_replicas[request.uuid] = replica_ids
        return self._volume_view(request.uuid)

    async def destroy_volume(self, request: DestroyVolume) -> None:
        logger.debug(f"Destroying volume {request.uuid}")
        if request.uuid not in self.volumes:
            raise NotFound(f"volume {request.uuid} not found")

        for key in self._volume_nexuses.pop(request.uuid):
            self.nexuses.pop(key, None)
        for uuid in self._volume_replicas.pop(request.uuid):
            if uuid in self.replicas:
                self._destroy_replica(uuid)
        del self.volumes[request.uuid]
