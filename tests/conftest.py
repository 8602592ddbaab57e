"""Global test configuration and fixtures."""
import pytest
import pytest_asyncio
from aiohttp.test_utils import TestClient, TestServer

from rest_gateway.app import create_app
from rest_gateway.bus import InMemoryBus
from rest_gateway.models import CreateNexus, CreatePool, CreateReplica


@pytest.fixture
def bus():
    """In-memory bus with two online nodes and no storage."""
    bus = InMemoryBus()
    bus.add_node("n1")
    bus.add_node("n2")
    return bus


@pytest_asyncio.fixture
async def populated_bus(bus):
    """Bus with a pool on each node, a replica in p1 and a nexus on n1."""
    await bus.create_pool(CreatePool(node="n1", name="p1", disks=["/dev/sdb"]))
    await bus.create_pool(CreatePool(node="n2", name="p2", disks=["/dev/sdc"]))
    await bus.create_replica(CreateReplica(node="n1", uuid="r1", pool="p1", size=1024))
    await bus.create_nexus(CreateNexus(
        node="n1",
        uuid="x1",
        size=1024,
        children=["bdev:///r1"],
    ))
    return bus


@pytest_asyncio.fixture
async def client(bus):
    """aiohttp test client for the gateway serving ``bus``."""
    async with TestClient(TestServer(create_app(bus))) as client:
        yield client


@pytest_asyncio.fixture
async def populated_client(populated_bus):
    async with TestClient(TestServer(create_app(populated_bus))) as client:
        yield client
