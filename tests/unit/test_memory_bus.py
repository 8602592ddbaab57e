"""Unit tests for the in-memory message bus."""

import pytest

from rest_gateway.bus import MessageBusError, NotFound, NotUnique
from rest_gateway.bus.memory import DISK_CAPACITY
from rest_gateway.models import (
    AddNexusChild,
    ChildState,
    CreateNexus,
    CreatePool,
    CreateReplica,
    CreateVolume,
    DestroyPool,
    DestroyReplica,
    DestroyVolume,
    NexusState,
    Protocol,
    RemoveNexusChild,
    ShareNexus,
    UnshareNexus,
    filters,
)
from rest_gateway.models.filters import InvalidFilter


class TestQueries:
    @pytest.mark.asyncio
    async def test_nodes(self, bus):
        nodes = await bus.get_nodes(filters.All())
        assert [n.id for n in nodes] == ["n1", "n2"]
        node = await bus.get_node(filters.Node("n2"))
        assert node.grpc_endpoint == "n2:10124"

    @pytest.mark.asyncio
    async def test_filtering_by_ancestors(self, populated_bus):
        assert len(await populated_bus.get_pools(filters.All())) == 2
        assert [p.name for p in await populated_bus.get_pools(filters.Node("n2"))] == ["p2"]
        assert await populated_bus.get_replicas(filters.Pool("p2")) == []
        replica = await populated_bus.get_replica(filters.NodePoolReplica("n1", "p1", "r1"))
        assert replica.uri == "bdev:///r1"

    @pytest.mark.asyncio
    async def test_single_lookups(self, populated_bus):
        with pytest.raises(NotFound):
            await populated_bus.get_pool(filters.Pool("missing"))
        await populated_bus.create_pool(CreatePool(node="n2", name="p1", disks=["/dev/sdd"]))
        with pytest.raises(NotUnique):
            await populated_bus.get_pool(filters.Pool("p1"))

    @pytest.mark.asyncio
    async def test_rejects_unsupported_filters(self, bus):
        with pytest.raises(InvalidFilter):
            await bus.get_nodes(filters.Pool("p1"))

    @pytest.mark.asyncio
    async def test_results_are_copies(self, populated_bus):
        """Test that callers cannot mutate the stored state."""
        pool = await populated_bus.get_pool(filters.Pool("p1"))
        pool.disks.append("/dev/evil")
        assert (await populated_bus.get_pool(filters.Pool("p1"))).disks == ["/dev/sdb"]


class TestPools:
    @pytest.mark.asyncio
    async def test_create(self, bus):
        pool = await bus.create_pool(CreatePool(node="n1", name="p1", disks=["/dev/sdb", "/dev/sdc"]))
        assert pool.capacity == 2 * DISK_CAPACITY
        assert pool.used == 0

    @pytest.mark.asyncio
    async def test_create_on_unknown_node(self, bus):
        with pytest.raises(NotFound):
            await bus.create_pool(CreatePool(node="n9", name="p1", disks=["/dev/sdb"]))

    @pytest.mark.asyncio
    async def test_duplicate(self, populated_bus):
        with pytest.raises(MessageBusError) as exc_info:
            await populated_bus.create_pool(CreatePool(node="n1", name="p1", disks=["/dev/sdb"]))
        assert exc_info.value.source_kind == "ReplyWithError"

    @pytest.mark.asyncio
    async def test_destroy_busy_pool(self, populated_bus):
        with pytest.raises(MessageBusError):
            await populated_bus.destroy_pool(DestroyPool(node="n1", name="p1"))

    @pytest.mark.asyncio
    async def test_destroy(self, populated_bus):
        await populated_bus.destroy_pool(DestroyPool(node="n2", name="p2"))
        assert await populated_bus.get_pools(filters.Node("n2")) == []
        with pytest.raises(NotFound):
            await populated_bus.destroy_pool(DestroyPool(node="n2", name="p2"))


class TestReplicas:
    @pytest.mark.asyncio
    async def test_space_accounting(self, populated_bus):
        pool = await populated_bus.get_pool(filters.Pool("p1"))
        assert pool.used == 1024
        await populated_bus.destroy_replica(DestroyReplica(node="n1", pool="p1", uuid="r1"))
        assert (await populated_bus.get_pool(filters.Pool("p1"))).used == 0

    @pytest.mark.asyncio
    async def test_shared_replica_uri(self, populated_bus):
        replica = await populated_bus.create_replica(
            CreateReplica(node="n2", uuid="r2", pool="p2", size=1024, share=Protocol.NVMF))
        assert replica.uri == "nvmf://n2:8420/nqn.2019-05.io.openebs:r2"

    @pytest.mark.asyncio
    async def test_too_large(self, populated_bus):
        with pytest.raises(MessageBusError):
            await populated_bus.create_replica(
                CreateReplica(node="n2", uuid="r2", pool="p2", size=DISK_CAPACITY + 1))

    @pytest.mark.asyncio
    async def test_destroy_in_wrong_pool(self, populated_bus):
        with pytest.raises(NotFound):
            await populated_bus.destroy_replica(DestroyReplica(node="n2", pool="p2", uuid="r1"))


class TestNexuses:
    @pytest.mark.asyncio
    async def test_share_and_unshare(self, populated_bus):
        uri = await populated_bus.share_nexus(ShareNexus(node="n1", uuid="x1", protocol=Protocol.NVMF))
        assert uri == "nvmf://n1:8420/nqn.2019-05.io.openebs:nexus-x1"
        # sharing again over the same protocol is idempotent
        assert await populated_bus.share_nexus(
            ShareNexus(node="n1", uuid="x1", protocol=Protocol.NVMF)) == uri
        with pytest.raises(MessageBusError):
            await populated_bus.share_nexus(ShareNexus(node="n1", uuid="x1", protocol=Protocol.ISCSI))

        await populated_bus.unshare_nexus(UnshareNexus(node="n1", uuid="x1"))
        assert (await populated_bus.get_nexus(filters.Nexus("x1"))).device_uri == ""

    @pytest.mark.asyncio
    async def test_children(self, populated_bus):
        child = await populated_bus.add_nexus_child(
            AddNexusChild(node="n1", nexus="x1", uri="nvmf://n2:8420/nqn:r2"))
        assert child.state == ChildState.DEGRADED
        assert child.rebuild_progress == 0
        nexus = await populated_bus.get_nexus(filters.Nexus("x1"))
        assert nexus.state == NexusState.DEGRADED
        assert nexus.rebuilds == 1

        await populated_bus.remove_nexus_child(
            RemoveNexusChild(node="n1", nexus="x1", uri="nvmf://n2:8420/nqn:r2"))
        nexus = await populated_bus.get_nexus(filters.Nexus("x1"))
        assert [c.uri for c in nexus.children] == ["bdev:///r1"]
        assert nexus.state == NexusState.ONLINE

    @pytest.mark.asyncio
    async def test_last_child_stays(self, populated_bus):
        with pytest.raises(MessageBusError):
            await populated_bus.remove_nexus_child(RemoveNexusChild(node="n1", nexus="x1", uri="bdev:///r1"))
        with pytest.raises(NotFound):
            await populated_bus.remove_nexus_child(RemoveNexusChild(node="n1", nexus="x1", uri="bdev:///r9"))

    @pytest.mark.asyncio
    async def test_needs_children(self, bus):
        with pytest.raises(MessageBusError):
            await bus.create_nexus(CreateNexus(node="n1", uuid="x1", size=1, children=[]))


class TestVolumes:
    @pytest.mark.asyncio
    async def test_create_and_destroy(self, populated_bus):
        volume = await populated_bus.create_volume(
            CreateVolume(uuid="v1", size=1024, replicas=2, preferred_nexus_nodes=["n2"]))
        assert volume.state == NexusState.ONLINE
        assert [n.node for n in volume.children] == ["n2"]
        uris = sorted(c.uri for c in volume.children[0].children)
        # replica local to the nexus is not shared
        assert uris == ["bdev:///v1-1", "nvmf://n1:8420/nqn.2019-05.io.openebs:v1-0"]

        assert [v.uuid for v in await populated_bus.get_volumes(filters.Node("n2"))] == ["v1"]
        assert await populated_bus.get_volumes(filters.Node("n1")) == []

        await populated_bus.destroy_volume(DestroyVolume(uuid="v1"))
        assert await populated_bus.get_volumes(filters.All()) == []
        assert await populated_bus.get_replicas(filters.Pool("p2")) == []

    @pytest.mark.asyncio
    async def test_not_enough_pools(self, populated_bus):
        with pytest.raises(MessageBusError):
            await populated_bus.create_volume(CreateVolume(uuid="v1", size=1024, replicas=3))

    @pytest.mark.asyncio
    async def test_destroy_missing(self, bus):
        with pytest.raises(NotFound):
            await bus.destroy_volume(DestroyVolume(uuid="v1"))
